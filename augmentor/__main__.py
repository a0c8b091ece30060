import sys

from augmentor.cli import main

sys.exit(main())
