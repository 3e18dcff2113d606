from setuptools import setup, find_packages

setup(
    name="timed-trivia",
    version="0.1.0",
    description="Timed trivia quiz runner with time-decayed scoring",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "timed-trivia=timed_trivia.cli:main",
        ],
    },
)
