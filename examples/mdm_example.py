"""Example usage: install the MDM registrations and match a few birth dates."""

import logging
from typing import List

from config.models import SchemaVariant
from config.rules import MdmRules
from config.settings import MdmSettings
from core.matcher import DateMatcher
from core.store import InMemoryRegistrationStore
from core.synchronizer import RegistrationSynchronizer

def create_synchronizer(
    store: InMemoryRegistrationStore,
    mdm_types: List[str],
    variant: SchemaVariant = SchemaVariant.R4,
    channel_prefix: str = ""
) -> RegistrationSynchronizer:
    """
    Create a synchronizer for the given MDM resource types.

    Args:
        store: Store the registrations are written to
        mdm_types: Resource types taking part in MDM
        variant: Schema variant the server runs with
        channel_prefix: Prefix applied to the MDM channel name

    Returns:
        RegistrationSynchronizer: Configured synchronizer
    """
    settings = MdmSettings(
        schema_variant=variant.value,
        rules=MdmRules(mdm_types=mdm_types),
        channel_prefix=channel_prefix
    )
    return RegistrationSynchronizer.from_settings(settings, store)

def run_example(variant: SchemaVariant = SchemaVariant.R4) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        store = InMemoryRegistrationStore()
        synchronizer = create_synchronizer(store, ["Patient", "Practitioner"], variant)

        first = synchronizer.synchronize()
        logging.info(f"First pass created: {first.created}")

        second = synchronizer.synchronize()
        logging.info(f"Second pass created: {second.created}, skipped: {second.skipped}")

        for registration in store.search_managed():
            logging.info(f"{registration.id}: {registration.to_dict()}")

        matcher = DateMatcher()
        pairs = [
            ("2020-05-01", "2020-05-01T13:45:00"),
            ("2020-05-01", "2020-05-02T00:00:00"),
            ("1984", "1984-07-12"),
            ("1984-07", "1985-07-12T08:00:00Z"),
        ]
        for left, right in pairs:
            logging.info(f"{left} ~ {right}: {matcher.match_values(left, right)}")

    except Exception as e:
        logging.error(f"An error occurred: {e}", exc_info=True)
        raise

if __name__ == "__main__":
    run_example(SchemaVariant.R5)
