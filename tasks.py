from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)


@task
def leaderboard(c, config=None):
    """Print the current leaderboard."""
    option = f" --config {config}" if config else ""
    c.run(f"elite-tournament{option} leaderboard")
