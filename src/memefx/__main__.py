import sys

from memefx.main import main

sys.exit(main())
