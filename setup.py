"""
model-translations setup.py — Package configuration.
"""

from setuptools import find_packages, setup

setup(
    name="model-translations",
    version="1.0.0",
    description="Locale-aware, database-backed translation of SQLAlchemy model attributes",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "sqlalchemy>=2.0",
        "pydantic>=2.5",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
