import sys

from pathtracer.main import main

sys.exit(main())
