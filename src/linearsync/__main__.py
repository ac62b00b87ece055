"""Allow ``python -m linearsync``."""

from linearsync.main import main

main()
