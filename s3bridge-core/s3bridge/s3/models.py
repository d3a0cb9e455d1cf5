import dataclasses
from typing import Dict, List, Mapping, Optional

from s3bridge.api.s3 import AccessKeyId, ActionType, BucketName, HttpVerb, ObjectKey, SecretAccessKey


@dataclasses.dataclass
class OperationRequest:
    """
    Everything needed to sign, send and interpret one storage request. A new instance is created for every call of
    an operation, and discarded once the result has been delivered.
    """

    access_key_id: AccessKeyId
    bucket_name: BucketName
    secret_access_key: SecretAccessKey
    verb: HttpVerb
    object_key: Optional[ObjectKey] = None
    headers: Dict[str, str] = dataclasses.field(default_factory=dict)
    query_params: List[str] = dataclasses.field(default_factory=list)
    """already url-encoded ``name=value`` pairs, in the order they are sent"""
    body: Optional[bytes] = None
    action_type: ActionType = ActionType.object


@dataclasses.dataclass
class ResponseEnvelope:
    """The fully buffered response of the storage service, together with what is needed to pick its parser."""

    status_code: int
    headers: Mapping[str, str]
    """case-insensitive mapping of the response headers"""
    body: str
    verb: HttpVerb
    action_type: ActionType = ActionType.object
