def main() -> None:
    """CLI entrypoint for the replicate-sdk console script."""
    from replicate_sdk.cli.app import app

    app()
