# primerpedia/__main__.py
from primerpedia.cli import app

app(prog_name="primerpedia")
