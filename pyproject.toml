[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sshkeykit"
version = "0.1.0"
description = "SSH key building blocks: algorithms, fingerprints, randomart, certificate fields, authorized_keys and known_hosts parsing"
requires-python = ">=3.10"
dependencies = [
    "bcrypt",
]
keywords = ["ssh", "openssh", "fingerprint", "randomart", "authorized_keys", "known_hosts", "certificate"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sshkeykit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
