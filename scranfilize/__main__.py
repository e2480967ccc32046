import sys

from scranfilize.cli import main

sys.exit(main())
