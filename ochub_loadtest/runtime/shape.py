"""Locust load shape that follows the scenario profiles of a run configuration."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Type

from locust import LoadTestShape

from ..core.models import RunConfiguration
from ..core.timeline import RunTimeline
from .users import ScenarioUser

logger = logging.getLogger(__name__)


class ProfileShape(LoadTestShape):
    """
    Sums the users every active scenario wants and spawns only the active
    scenarios' user classes. Stops once every scenario is done.
    """

    abstract = True

    timeline: RunTimeline
    user_classes: Sequence[Type[ScenarioUser]] = ()

    def _classes_for(self, names: Sequence[str]) -> List[Type[ScenarioUser]]:
        return [cls for cls in self.user_classes if cls.scenario.name in names]

    def tick(self) -> Optional[Tuple]:
        run_time = self.get_run_time()
        if self.timeline.is_done(run_time):
            return None
        active = self.timeline.active(run_time)
        users = sum(t.users_at(run_time) for t in active)
        if not active:
            return (0, 1)
        # Reach each new level within about a second
        spawn_rate = max(users, 1)
        return (users, spawn_rate, self._classes_for([t.name for t in active]))


def build_shape_class(
    options: RunConfiguration,
    user_classes: Sequence[Type[ScenarioUser]],
) -> Type[ProfileShape]:
    """Concrete ProfileShape for one run configuration."""
    timeline = RunTimeline(list(options.scenarios.values()))
    logger.debug("Load shape ends after %.0fs", timeline.end)
    return type(ProfileShape)(
        "RunProfileShape",
        (ProfileShape,),
        {
            "abstract": False,
            "timeline": timeline,
            "user_classes": tuple(user_classes),
            "__module__": __name__,
        },
    )
