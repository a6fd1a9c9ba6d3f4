# File: vidscribe/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Feature tables (raw transcriptions) inherit from this.
Base = declarative_base()
