import sys

from bilisp.interpreter import main

sys.exit(main())
