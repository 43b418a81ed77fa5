from linkshortener.cli.app import ConsoleApp, build_service, main


__all__ = [
    'ConsoleApp',
    'build_service',
    'main',
]
