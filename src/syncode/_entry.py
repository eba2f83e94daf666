"""Console script entry point."""


def main():
    from syncode.cli.main import app

    app()


if __name__ == "__main__":
    main()
