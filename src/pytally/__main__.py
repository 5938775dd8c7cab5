import sys

from pytally.cli import main

sys.exit(main())
