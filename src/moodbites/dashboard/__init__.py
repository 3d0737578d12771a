"""Face attribute dashboard with Gradio."""


def main() -> None:
    """CLI entry point for the Gradio dashboard."""
    from moodbites.dashboard.app import create_app
    from moodbites.log import configure_logging

    configure_logging()
    app = create_app()
    app.launch()
