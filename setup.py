"""Setup configuration for Recipe Vault."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="recipe-vault",
    version="0.1.0",
    description="Transactional persistence for recipes, ingredients and user recipe links",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["recipe_vault", "recipe_vault.*"], exclude=["recipe_vault.tests*"]),
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "Topic :: Database",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.24",
        ],
    },
    entry_points={
        "console_scripts": [
            "recipe-vault=recipe_vault.utils.recipe_cli:main",
        ],
    },
)
