"""Extract records from a results page saved to disk (no network)."""

import json
import sys
from pathlib import Path

from imagesearch import extract

page = Path(sys.argv[1]).read_text(encoding="utf-8")
images = extract(page, limit=20)
print(json.dumps([image.model_dump() for image in images], indent=2))
