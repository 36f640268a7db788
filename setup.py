import os
from pathlib import Path

from setuptools import setup

SOURCE_ROOT = Path(__file__).resolve().parent


def main():
    setup(
        name="gir-bindgen",
        version=detect_version(),
        description="Generate TypeScript FFI bindings from GObject-Introspection data",
        long_description=compute_long_description(),
        long_description_content_type="text/markdown",
        install_requires=["typing_extensions; python_version<'3.11'"],
        extras_require={"test": ["pytest"]},
        python_requires=">=3.7",
        keywords="gobject introspection gir gtk typescript ffi codegen",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Environment :: Console",
            "Intended Audience :: Developers",
            "Natural Language :: English",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.7",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: Implementation :: CPython",
            "Topic :: Software Development :: Code Generators",
        ],
        packages=["gir_bindgen", "gir_bindgen.gir", "gir_bindgen.writers", "gir_bindgen.generators"],
        entry_points={"console_scripts": ["gir-bindgen=gir_bindgen.cli:main"]},
        zip_safe=False,
    )


def detect_version() -> str:
    pkg_info = SOURCE_ROOT / "PKG-INFO"
    in_source_package = pkg_info.exists()
    if in_source_package:
        version_line = [
            line for line in pkg_info.read_text(encoding="utf-8").split("\n") if line.startswith("Version: ")
        ][0].strip()
        return version_line[9:]

    version = os.environ.get("GIR_BINDGEN_VERSION")
    if version is not None:
        return version

    return "0.1.0"


def compute_long_description() -> str:
    readme = SOURCE_ROOT / "README.md"
    if not readme.exists():
        return ""
    return readme.read_text(encoding="utf-8")


if __name__ == "__main__":
    main()
