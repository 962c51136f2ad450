"""Allow ``python -m miniprinter``."""

from miniprinter.main import main

main()
