"""Allow `python -m mockapic`."""

from .cli import main

if __name__ == '__main__':
    main()
