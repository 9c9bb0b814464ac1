"""NetScore services for single and batch scoring."""

from netscore.services.batch import BatchResult, parse_package_url, score_url_file
from netscore.services.scorer import score_package

__all__ = ["BatchResult", "parse_package_url", "score_url_file", "score_package"]
