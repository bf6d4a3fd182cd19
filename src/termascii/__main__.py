import sys

from termascii.cli import main


sys.exit(main())
