from regintel_engine.cli.main import app

app()
