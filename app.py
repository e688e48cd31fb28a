"""Entry point: `flask --app app run` or `python app.py`."""

from src.guard_scheduling.guard_scheduling.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config["DEBUG"])
