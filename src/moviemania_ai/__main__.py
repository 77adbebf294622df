import sys

from moviemania_ai.cli import main

sys.exit(main())
