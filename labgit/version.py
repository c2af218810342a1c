"""Contains the version of the labgit client.

This is the version the client declares to the server extension. It must be
kept in sync with pyproject.toml, specifically the [tool.bumpversion] section:

```
[tool.bumpversion]
current_version = "M.m.p"
```
"""

VERSION = "0.11.0"
