[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qrgen"
version = "0.1.0"
description = "QR Code generator: segment encoding, Reed-Solomon error correction, masking and a small text-mode front end"
requires-python = ">=3.10"
dependencies = []
keywords = ["qr", "qrcode", "barcode", "reed-solomon", "2d-barcode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
qrgen = "qrgen.app:main"

[tool.hatch.build.targets.wheel]
packages = ["qrgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
