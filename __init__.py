"""
MDM Linkage
===========

Record-linkage support for a master data management server: keeping the
MDM-managed registrations present in the registration store, and matching
temporal values recorded at different precisions.

Key Features:
- One managed registration per MDM resource type, for DSTU3, R4 and R5 shapes
- Create-if-absent synchronization that never overwrites existing registrations
- Serialized synchronization passes, safe to re-run
- Date/date-time matching that truncates the finer value to the coarser precision
"""

from core.synchronizer import RegistrationSynchronizer, SyncResult
from core.matcher import DateMatcher, matches
from core.temporal import Precision, TemporalValue, ValueKind, parse_temporal
from core.exceptions import ConfigurationError

from config.models import SchemaVariant
from config.rules import MdmRules
from config.settings import MdmSettings

__version__ = "1.0.0"
