from pathlib import Path
from setuptools import find_packages, setup


def _read_version() -> str:
    init = Path(__file__).parent / "src" / "runparts" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found in src/runparts/__init__.py")


setup(
    name="runparts",
    version=_read_version(),
    description="Run-parts style directory merger: list or concatenate drop-in files",
    author="runparts contributors",
    license="MIT",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["runparts=runparts.cli:main"]},
)
