import sys

from user_storage.cli import main


sys.exit(main())
