from careplan.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
PLAN_FILE = DATA_DIR / 'plans.json'

__all__ = ['DATA_DIR', 'PLAN_FILE']
