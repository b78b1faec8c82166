"""
Mockapic CLI

Command-line interface for the Mockapic mock server.

Commands:
    serve       - Start the mock HTTP server
    list        - List stored mocks, most recent first
    clean       - Remove the oldest mocks beyond a limit

Examples:
    # Start the server on port 3333, delays capped at 10s
    mockapic serve --port 3333 --max-delay 10s

    # Start from a YAML configuration file
    mockapic serve --config mockapic.yaml

    # Keep only the 100 most recent mocks
    mockapic clean --max-limit 100 --working-directory ./mocks
"""

import argparse
import logging
import sys

from .config import LOG_LEVELS, ServerConfig
from .mock import ListError, Mock, MockapicServer


LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'


def _setup_logging(level: str):
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def _load_config(args) -> ServerConfig:
    """Build the server configuration: YAML file first, then CLI overrides."""
    data = {}
    if args.config:
        data = ServerConfig.from_yaml(args.config).to_dict()

    overrides = {
        'host': args.host,
        'port': args.port,
        'working_directory': args.working_directory,
        'max_delay': args.max_delay,
        'max_limit': args.max_limit,
        'clean_interval': args.clean_interval,
        'log_level': args.log_level,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    return ServerConfig.from_dict(data)


def cmd_serve(args):
    """
    Start the mock server.

    Args:
        args: Parsed command-line arguments
    """
    try:
        config = _load_config(args)
    except (OSError, ValueError) as e:
        print(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    _setup_logging(config.log_level)

    try:
        server = MockapicServer(config=config)
    except (OSError, ValueError) as e:
        print(f"❌ Failed to create mock server: {e}")
        sys.exit(1)

    try:
        server.start()
    except KeyboardInterrupt:
        print("\n\n👋 Mock server stopped")


def cmd_list(args):
    """
    Print stored mocks, most recent first.

    Args:
        args: Parsed command-line arguments
    """
    _setup_logging(args.log_level)
    mocker = Mock(args.working_directory)

    try:
        mocks = mocker.list()
    except ListError as e:
        print(f"❌ Failed to list mocks: {e}")
        sys.exit(1)

    print(f"📋 {len(mocks)} mock(s) in {args.working_directory}")
    for light in mocks:
        print(f"   {light.created_at}  {light.uuid}  {light.status}  {light.content_type}")


def cmd_clean(args):
    """
    Remove the oldest mocks beyond --max-limit.

    Args:
        args: Parsed command-line arguments
    """
    _setup_logging(args.log_level)
    mocker = Mock(args.working_directory)

    try:
        removed = mocker.clean(args.max_limit)
    except ListError as e:
        print(f"❌ Failed to clean mocks: {e}")
        sys.exit(1)

    print(f"🧹 Removed {removed} mock(s), limit {args.max_limit}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='mockapic',
        description="Mockapic - mock HTTP server serving canned responses by identifier",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the server
  %(prog)s serve --port 3333 --working-directory ./mocks

  # Create a mock, then fetch it with a 500ms delay
  curl -X POST 'http://localhost:3333/v1/new?status=200&contentType=text/plain&charset=UTF-8' -d 'Hello World'
  curl 'http://localhost:3333/v1/<uuid>?delay=500ms'

  # Keep the 100 most recent mocks
  %(prog)s clean --max-limit 100
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # --- SERVE command ---
    serve_parser = subparsers.add_parser('serve', help='Start the mock HTTP server')
    serve_parser.add_argument('-c', '--config', help='YAML configuration file')
    serve_parser.add_argument('--host', help='Host to bind (default: 127.0.0.1)')
    serve_parser.add_argument('-p', '--port', type=int, help='Port to bind (default: 3333)')
    serve_parser.add_argument('-d', '--working-directory', help='Directory storing the mocks (default: ./mocks)')
    serve_parser.add_argument('--max-delay', help='Maximum delay a request may ask for (default: 60s)')
    serve_parser.add_argument('--max-limit', type=int, help='Maximum number of mocks kept (default: 0, unlimited)')
    serve_parser.add_argument('--clean-interval', help='Period of the background cleaner (default: 1m)')
    serve_parser.add_argument('--log-level', choices=LOG_LEVELS, help='Log level (default: info)')

    # --- LIST command ---
    list_parser = subparsers.add_parser('list', help='List stored mocks')
    list_parser.add_argument('-d', '--working-directory', default='./mocks',
                             help='Directory storing the mocks (default: ./mocks)')
    list_parser.add_argument('--log-level', default='warning', choices=LOG_LEVELS,
                             help='Log level (default: warning)')

    # --- CLEAN command ---
    clean_parser = subparsers.add_parser('clean', help='Remove the oldest mocks beyond a limit')
    clean_parser.add_argument('-n', '--max-limit', type=int, required=True, help='Number of most recent mocks to keep')
    clean_parser.add_argument('-d', '--working-directory', default='./mocks',
                              help='Directory storing the mocks (default: ./mocks)')
    clean_parser.add_argument('--log-level', default='warning', choices=LOG_LEVELS,
                              help='Log level (default: warning)')

    args = parser.parse_args(argv)

    # Dispatch to command handler
    if args.command == 'serve':
        cmd_serve(args)
    elif args.command == 'list':
        cmd_list(args)
    elif args.command == 'clean':
        cmd_clean(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
