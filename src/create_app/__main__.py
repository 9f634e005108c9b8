from create_app.cli import app

app(prog_name="create-app")
