import nox

nox.options.default_venv_backend = "uv"
nox.options.reuse_existing_virtualenvs = True
nox.options.stop_on_first_error = True


SUPPORTED_PYTHON_VERSIONS = ["3.9", "3.10", "3.11", "3.12", "3.13"]


@nox.session
def lint(session):
    session.install("ruff")
    session.run("ruff", "check", "labgit", "tests")
    session.run("ruff", "format", "--check", "labgit", "tests")


@nox.session(python=SUPPORTED_PYTHON_VERSIONS)
def tests(session):
    session.install("-e", ".[test]")
    # Pass `-- tests/gate` to run a subset
    session.run("pytest", *(session.posargs or ["tests"]))
