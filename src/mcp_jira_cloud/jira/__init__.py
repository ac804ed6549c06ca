"""Jira Cloud REST operations: request building, response normalization, client."""

from .client import JiraRestClient
from .config import JiraCredentials
from .operation import OperationDescriptor
from .operations import OPERATIONS

__all__ = ["JiraCredentials", "JiraRestClient", "OperationDescriptor", "OPERATIONS"]
