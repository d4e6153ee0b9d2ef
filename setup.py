"""
Setup script для модуля smart_text_analyzer
"""

from setuptools import setup, find_packages
from pathlib import Path

# Читаем README для описания
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="smart_text_analyzer",
    version="0.1.0",
    author="Sergey",
    description="Детерминированный анализ текста: тональность, эмоции, ключевые слова, реферат",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Processing :: Linguistic",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5.0",
        "beautifulsoup4>=4.11.0",
        "openpyxl>=3.0.0",
        "python-dotenv>=0.19.0",
        "PyYAML>=6.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "smart-text-analyzer=smart_text_analyzer.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
