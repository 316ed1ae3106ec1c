import sys

from pdf_rag.cli import main

sys.exit(main())
