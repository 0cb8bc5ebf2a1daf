import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with all test extras into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no HTTP stack required)."""
    _install(session)
    session.run("pytest", "tests/storefront/domain/")


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_bdd(session: nox.Session) -> None:
    """Run the behaviour scenarios."""
    _install(session)
    session.run("pytest", "-m", "bdd")


@nox.session(python=False)
def loadtest(session: nox.Session) -> None:
    """Run a short headless load test against a running server."""
    host = session.posargs[0] if session.posargs else "http://localhost:8000"
    session.run(
        "locust",
        "-f",
        "loadtests/locustfile.py",
        "StorefrontUser",
        "SimulationTickUser",
        "--headless",
        "-u",
        "20",
        "-r",
        "5",
        "-t",
        "60s",
        "--host",
        host,
        external=True,
    )
