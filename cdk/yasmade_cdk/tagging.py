"""Tag application, run once over every resource a stack produced."""

from collections.abc import Iterable, Mapping

from aws_cdk import Tags
from constructs import Construct

from .logging import StructuredLogger

logger = StructuredLogger(__name__)


def apply_tags(resources: Iterable[Construct], tags: Mapping[str, str]) -> int:
    """Add every tag to every resource.

    Args:
        resources: Constructs to tag (Tags.of also reaches their children)
        tags: Tag key/value pairs

    Returns:
        Number of constructs tagged
    """
    count = 0
    for resource in resources:
        for key, value in tags.items():
            Tags.of(resource).add(key, value)
        count += 1

    logger.debug("Applied tags", resource_count=count, tag_keys=sorted(tags))
    return count
