from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="skillsmith",
    version="0.1.0",
    description="Skill document parsing and trigger-gated prompt injection for LLM pipelines",
    author="Skillsmith Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    python_requires=">=3.11",
)
