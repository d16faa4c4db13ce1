import sys

from bracket_index.cli import main

sys.exit(main())
