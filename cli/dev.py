"""Dev server launcher."""


def main() -> None:
    """Run the Jobly API with uvicorn using settings from the environment."""
    from app.main import run

    run()


if __name__ == "__main__":
    main()
