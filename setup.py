from pathlib import Path

import setuptools


def load_requirements(filename: str) -> list[str]:
    requirements = []
    for line in Path(__file__).with_name(filename).read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        requirements.append(stripped)
    return requirements


setuptools.setup(
    name="autobuild_pc_core",
    version="0.3",
    description="AutoBuild PC: build normalization and favorites sync for AI-generated PC builds",
    packages=[
        "controllers",
        "models",
        "repositories",
        "services",
        "utils",
        "utils.constants",
    ],
    classifiers=["Programming Language :: Python :: 3"],
    python_requires=">=3.11",
    install_requires=load_requirements("requirements.txt"),
    extras_require={"test": load_requirements("requirements-test.txt")},
)
