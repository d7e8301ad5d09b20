from setuptools import setup, find_packages

setup(
    name="seasontracker",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.24.0",
        "tenacity>=8.2.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pandas>=2.0.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "season-tracker=seasontracker.cli:main",
        ],
    },
    author="Aaron",
    description="Team results, fixtures and league statistics from the ESPN schedule feeds",
)
