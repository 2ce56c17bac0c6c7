import sys

from buybox_scraper.main import main

sys.exit(main())
