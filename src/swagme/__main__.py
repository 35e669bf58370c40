import sys

from swagme.cli import main

sys.exit(main())
