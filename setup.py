from setuptools import setup, find_packages

setup(
    name="selenese-tools",
    version="0.1.0",
    description="Selenium sessions, waits and page objects for pytest functional tests",
    author="Selenese Tools Team",
    packages=find_packages(include=["selenese_tools", "selenese_tools.*"]),
    install_requires=[
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
        "pytest>=7.0.0",
        "selenium>=4.0.0",
        "webdriver-manager>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "isort>=5.0.0",
        ],
    },
    entry_points={
        "pytest11": [
            "selenese = selenese_tools.plugin",
        ],
    },
    python_requires=">=3.8",
)
