import sys

from term_autocompleter.cli import main

sys.exit(main())
