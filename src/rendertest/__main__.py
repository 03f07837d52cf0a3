from rendertest.cli.app import app

app(prog_name="rendertest")
