"""Allow ``python -m notevault``."""

from notevault.main import main

main()
