#!/usr/bin/env python
from setuptools import find_packages, setup

VERSION = __import__("maintenance_cache").get_version()
INSTALL_REQUIREMENTS = [
    "Django>=4.2",
    "django-maintenance-mode>=0.21",
    "django-redis",
    "django-structlog",
    "sentry-sdk",
    "structlog",
]
TEST_REQUIREMENTS = ["pytest", "pytest-django"]
SCRIPTS = ["manage.py"]
DESCRIPTION = "Cache-backed maintenance mode with filesystem fallback"
CLASSIFIERS = """\
Environment :: Web Environment
Framework :: Django
Programming Language :: Python
Programming Language :: Python :: 3
""".splitlines()

with open("README.md", "r") as f:
    LONG_DESCRIPTION = f.read()


setup(
    name="maintenance-cache-backend",
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["maintenance_cache", "maintenance_cache.*"]),
    include_package_data=True,
    package_data={"maintenance_cache": ["templates/*.html"]},
    scripts=SCRIPTS,
    install_requires=INSTALL_REQUIREMENTS,
    extras_require={"test": TEST_REQUIREMENTS},
    classifiers=CLASSIFIERS,
)
