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
def backfill(c, config="inkwell.yaml"):
    c.run(f"inkwell backfill --config {config}")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
