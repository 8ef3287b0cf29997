[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "teachdesk"
version = "0.1.0"
description = "Teacher-side client for student groups, task variants, question banks and per-student settings over a JSON socket protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["education", "testing", "classroom", "students", "quiz", "teacher"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Natural Language :: Russian",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Education :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
teachdesk = "teachdesk.app:main"

[tool.hatch.build.targets.wheel]
packages = ["teachdesk"]

[tool.pytest.ini_options]
addopts = "-ra"
