"""Allow ``python -m nfinstall``."""

from nfinstall.main import main

main()
