from setuptools import setup, find_packages

setup(
    name="shipping-rate-report",
    version="0.1.0",
    packages=find_packages(include=["rate_report", "rate_report.*"]),
    python_requires=">=3.10",
    install_requires=[
        "openpyxl>=3.1.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
        "psycopg2-binary>=2.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "rate-report=rate_report.cli:cli",
        ],
    },
)
