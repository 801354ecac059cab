from chesstui.app import app

app()
