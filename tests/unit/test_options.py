"""Unit tests for the options builder."""

import pytest

from ochub_loadtest.config.thresholds import LOAD_PROFILES, SUMMARY_TREND_STATS, THRESHOLDS
from ochub_loadtest.core.models import LoadProfile, ScenarioOverride, Stage, TestType
from ochub_loadtest.core.options import (
    DEFAULT_SCENARIO,
    SCENARIO_STAGGER_SECONDS,
    build_options,
    merge_thresholds,
)
from ochub_loadtest.utils.durations import parse_duration
from ochub_loadtest.utils.errors import ConfigurationError


@pytest.mark.unit
class TestBuildOptions:
    """Test cases for build_options()."""

    @pytest.mark.parametrize("test_type", [t.value for t in TestType])
    def test_tags_and_base_thresholds(self, test_type):
        options = build_options(test_type, "model-wine")

        assert options.tags["test_type"] == test_type
        assert options.tags["test_target"] == "model-wine"
        for selector, predicates in THRESHOLDS[test_type].items():
            assert options.thresholds[selector] == predicates

    def test_accepts_enum_member(self):
        options = build_options(TestType.SPIKE, "platform-obs")
        assert options.test_type == "spike"

    def test_unknown_test_type(self):
        with pytest.raises(ConfigurationError, match="Unknown test type: chaos"):
            build_options("chaos", "model-wine")

    @pytest.mark.parametrize("scenarios", [None, {}])
    def test_default_scenario(self, scenarios):
        options = build_options("stress", "model-wine", scenarios)

        assert list(options.scenarios) == [DEFAULT_SCENARIO]
        spec = options.scenarios[DEFAULT_SCENARIO]
        assert spec.profile == LOAD_PROFILES["stress"]
        assert spec.start_time == "0s"
        assert spec.exec is None
        assert dict(spec.tags) == {"scenario": DEFAULT_SCENARIO}

    def test_auto_offsets_are_staggered(self):
        options = build_options("load", "model-wine", {"a": {}, "b": {}, "c": {}})

        offsets = [spec.start_offset for spec in options.scenarios.values()]
        assert offsets[0] == 0
        assert offsets[1] - offsets[0] == SCENARIO_STAGGER_SECONDS
        assert offsets == [0, 2, 4]

    def test_explicit_offset_preserved_and_counter_untouched(self):
        options = build_options(
            "load",
            "model-wine",
            {
                "first": {},
                "pinned": {"startTime": "30s"},
                "second": {},
            },
        )

        assert options.scenarios["first"].start_time == "0s"
        assert options.scenarios["pinned"].start_time == "30s"
        assert options.scenarios["second"].start_time == "2s"

    def test_empty_offset_is_auto_assigned(self):
        options = build_options("load", "model-wine", {"first": {}, "blank": {"startTime": ""}})

        assert options.scenarios["blank"].start_time == "2s"

    @pytest.mark.parametrize("value,expected", [(5, "5s"), (1.5, "1.5s")])
    def test_numeric_offset_rendered_as_duration(self, value, expected):
        options = build_options("load", "model-wine", {"pinned": {"startTime": value}})

        assert options.scenarios["pinned"].start_time == expected
        assert options.to_dict()["scenarios"]["pinned"]["startTime"] == expected

    def test_override_merges_field_by_field(self):
        options = build_options(
            "load",
            "model-wine",
            {"burst": ScenarioOverride(stages=(Stage("10s", 3),), exec="predict")},
        )

        profile = options.scenarios["burst"].profile
        assert profile.executor == LOAD_PROFILES["load"].executor
        assert profile.stages == (Stage("10s", 3),)
        assert options.scenarios["burst"].exec == "predict"

    def test_override_can_switch_executor(self):
        options = build_options(
            "smoke",
            "model-wine",
            {"steady": {"executor": "constant-vus", "vus": 4, "duration": "1m"}},
        )

        profile = options.scenarios["steady"].profile
        assert (profile.vus, profile.duration) == (4, "1m")

    def test_unknown_override_field(self):
        with pytest.raises(ConfigurationError, match="Unknown scenario field"):
            build_options("smoke", "model-wine", {"x": {"iterations": 5}})

    def test_scenario_tag_wins_over_extra_tags(self):
        options = build_options(
            "smoke", "model-wine", {"wine-health": {"tags": {"scenario": "other", "team": "ml"}}}
        )

        assert dict(options.scenarios["wine-health"].tags) == {
            "scenario": "wine-health",
            "team": "ml",
        }

    def test_extra_thresholds_overlay(self):
        options = build_options(
            "smoke",
            "model-wine",
            extra_thresholds={
                "http_req_duration": "p(95)<1000",
                "http_req_duration{scenario:default}": ["p(99)<2000", "avg<500"],
            },
        )

        assert options.thresholds["http_req_duration"] == ("p(95)<1000",)
        assert options.thresholds["http_req_duration{scenario:default}"] == ("p(99)<2000", "avg<500")
        assert options.thresholds["checks"] == ("rate>0.90",)

    def test_base_tables_not_mutated(self):
        before = dict(THRESHOLDS["smoke"])
        build_options("smoke", "model-wine", extra_thresholds={"checks": ["rate>0.99"]})
        assert THRESHOLDS["smoke"] == before

    def test_result_is_read_only(self):
        options = build_options("smoke", "model-wine")

        with pytest.raises(TypeError):
            options.scenarios["other"] = None  # type: ignore[index]
        with pytest.raises(TypeError):
            options.thresholds["checks"] = ("rate>0",)  # type: ignore[index]

    def test_summary_trend_stats(self):
        options = build_options("soak", "model-wine")
        assert options.summary_trend_stats == SUMMARY_TREND_STATS


@pytest.mark.unit
class TestMergeThresholds:
    def test_idempotent(self):
        base = THRESHOLDS["load"]
        extra = {"http_req_duration{scenario:wine-predict}": ["p(95)<3000"], "checks": ["rate>0.95"]}

        once = merge_thresholds(base, extra)
        twice = merge_thresholds(once, extra)

        assert once == twice

    def test_without_extra(self):
        assert merge_thresholds({"checks": "rate>0.9"}) == {"checks": ("rate>0.9",)}

    def test_rejects_non_string_predicates(self):
        with pytest.raises(ConfigurationError):
            merge_thresholds({"checks": [0.9]})


@pytest.mark.unit
class TestEndToEnd:
    def test_smoke_wine(self):
        options = build_options("smoke", "model-wine")

        assert dict(options.thresholds) == {
            "http_req_failed": ("rate<0.10",),
            "http_req_duration": ("p(95)<3000",),
            "checks": ("rate>0.90",),
        }
        assert list(options.scenarios) == ["default"]
        profile = options.scenarios["default"].profile
        assert profile.executor == "constant-vus"
        assert profile.vus == 1
        assert parse_duration(profile.duration) == 10

    def test_load_wine_two_scenarios(self):
        options = build_options(
            "load",
            "model-wine",
            {
                "wine-health": {"exec": "testHealth"},
                "wine-predict": {"exec": "testPredict"},
            },
        )

        assert list(options.scenarios) == ["wine-health", "wine-predict"]
        health = options.scenarios["wine-health"]
        predict = options.scenarios["wine-predict"]
        assert health.start_time == "0s"
        assert predict.start_time == "2s"
        assert health.tags["scenario"] == "wine-health"
        assert predict.tags["scenario"] == "wine-predict"
        assert health.exec == "testHealth"
        assert isinstance(health.profile, LoadProfile)

    def test_payload_shape(self):
        payload = build_options("breakpoint", "model-wine").to_dict()

        scenario = payload["scenarios"]["default"]
        assert scenario["executor"] == "ramping-arrival-rate"
        assert scenario["startRate"] == 10
        assert scenario["preAllocatedVUs"] == 50
        assert scenario["maxVUs"] == 100
        assert scenario["startTime"] == "0s"
        assert scenario["tags"] == {"scenario": "default"}
        assert payload["tags"] == {"test_type": "breakpoint", "test_target": "model-wine"}
        assert payload["summaryTrendStats"][-1] == "p(99)"
