from buildset.cli.app import app

app()
