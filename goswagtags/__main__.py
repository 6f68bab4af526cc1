"""Allow ``python -m goswagtags``."""

from goswagtags.cli import main

if __name__ == '__main__':
    main()
