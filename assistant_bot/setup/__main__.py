import sys

from assistant_bot.setup.cli import main

sys.exit(main())
