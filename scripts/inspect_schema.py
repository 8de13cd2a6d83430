import sys
from typing import List
from sqlalchemy import inspect

from storefront.config import get_settings
from storefront.db import Base, make_engine
import storefront.models  # noqa: F401  (registers tables on Base)

# ---- DATABASE_URL from env or .env ----
db_url = get_settings().database_url
if not db_url:
    print("ERROR: DATABASE_URL is not set in env.", file=sys.stderr)
    sys.exit(2)

engine = make_engine(db_url)
insp = inspect(engine)

db_tables: List[str] = insp.get_table_names()

print("== MODELS ==")
for t in Base.metadata.sorted_tables:
    print(f"  {t.name:15} cols=", [c.name for c in t.columns])

print("\n== DATABASE ==")
print("tables =", db_tables)

problems = 0
for t in Base.metadata.sorted_tables:
    if t.name not in db_tables:
        print(f"  MISSING TABLE {t.name}")
        problems += 1
        continue
    actual = {c["name"] for c in insp.get_columns(t.name)}
    missing = sorted({c.name for c in t.columns} - actual)
    if missing:
        print(f"  {t.name}: missing columns {missing}")
        problems += 1

print("\nOK" if not problems else f"\n{problems} problem(s)")
sys.exit(1 if problems else 0)
