"""Allow ``python -m debsetup``."""

from debsetup.main import main

main()
