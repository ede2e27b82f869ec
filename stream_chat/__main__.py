import sys

from stream_chat.cli import main

sys.exit(main())
