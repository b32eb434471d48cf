from setuptools import setup, find_packages

setup(
    name="elastic-bezier",
    version="1.0.0",
    description="Cubic Bezier curve with spring-damped control points that chase the mouse",
    packages=find_packages(include=["rope", "rope.*"]),
    py_modules=["main", "doctor"],
    install_requires=[
        "pygame>=2.1.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "elastic-bezier=main:main",
        ],
    },
    python_requires=">=3.8",
)
