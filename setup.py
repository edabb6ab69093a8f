from setuptools import setup, find_packages
import re

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("ochub_loadtest/__init__.py", "r", encoding="utf-8") as f:
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", f.read(), re.M)
    if version_match:
        version = version_match.group(1)
    else:
        raise RuntimeError("Unable to find version string in ochub_loadtest/__init__.py")

setup(
    name="ochub-loadtest",
    version=version,
    author="OpenCloudHub",
    description="Load-test suite for the OpenCloudHub ML platform, built on Locust",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/opencloudhub/ochub-loadtest",
    packages=find_packages(exclude=["tests", "tests.*", "load_tests", "load_tests.*"]),
    include_package_data=True,
    package_data={
        "ochub_loadtest": [
            "data/*.json",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing :: Traffic Generation",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
    install_requires=[
        "locust>=2.20.0",  # Load generation runtime
        "requests>=2.28.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "rich>=13.0.0",  # For reports and logging
        "python-dotenv>=0.19.0",  # For .env files
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ochub-loadtest=ochub_loadtest.cli:main",
        ],
    },
)
