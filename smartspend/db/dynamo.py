import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from smartspend.core.config import settings

logger = logging.getLogger(__name__)

# Initialize DynamoDB resource
dynamodb = boto3.resource("dynamodb", region_name=settings.DYNAMO_REGION)

# Get table references
users_table = dynamodb.Table(settings.DYNAMO_USERS_TABLE)
expenses_table = dynamodb.Table(settings.DYNAMO_EXPENSES_TABLE)


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """Query the Users table by email (assumes a GSI exists on email)."""
    try:
        response = users_table.query(
            IndexName="email-index",
            KeyConditionExpression=Key("email").eq(email),
        )
        return _from_dynamo(response["Items"][0]) if response["Items"] else None
    except ClientError as e:
        logger.error(f"get_user_by_email failed: {e.response['Error']['Message']}")
        return None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """Get user by user_id from the Users table."""
    try:
        response = users_table.get_item(Key={"user_id": user_id})
        item = response.get("Item")
        return _from_dynamo(item) if item else None
    except ClientError as e:
        logger.error(f"get_user_by_id failed: {e.response['Error']['Message']}")
        return None


def put_user(user_item: dict) -> bool:
    """Insert a new user into the Users table."""
    try:
        users_table.put_item(Item=_convert_for_dynamo(user_item))
        return True
    except ClientError as e:
        logger.error(f"put_user failed: {e.response['Error']['Message']}")
        return False


def put_expenses(expense_items: List[dict]) -> bool:
    """Insert a batch of expenses. Expenses are never updated in place."""
    try:
        with expenses_table.batch_writer() as batch:
            for item in expense_items:
                batch.put_item(Item=_convert_for_dynamo(item))
        return True
    except ClientError as e:
        logger.error(f"put_expenses failed: {e.response['Error']['Message']}")
        return False


def get_expenses_for_user(user_id: str) -> List[Dict[str, Any]]:
    """Query every expense owned by ``user_id``, following pagination."""
    expenses: List[Dict[str, Any]] = []
    query_kwargs: Dict[str, Any] = {"KeyConditionExpression": Key("user_id").eq(user_id)}
    try:
        while True:
            response = expenses_table.query(**query_kwargs)
            expenses.extend(_from_dynamo(item) for item in response["Items"])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            query_kwargs["ExclusiveStartKey"] = last_key
    except ClientError as e:
        logger.error(f"get_expenses_for_user failed: {e.response['Error']['Message']}")
        return []
    return expenses


def delete_expense(user_id: str, expense_id: str) -> bool:
    """Delete a specific expense item. Returns False if nothing was deleted."""
    try:
        response = expenses_table.delete_item(
            Key={"user_id": user_id, "id": expense_id},
            ReturnValues="ALL_OLD",
        )
        return "Attributes" in response
    except ClientError as e:
        logger.error(f"delete_expense failed: {e.response['Error']['Message']}")
        return False


def _convert_for_dynamo(obj: Any):
    """
    Recursively convert floats to Decimal for DynamoDB compatibility.
    """
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_for_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_for_dynamo(v) for v in obj]
    return obj


def _from_dynamo(obj: Any):
    """
    Recursively convert Decimal instances back to native Python numeric types.
    """
    if isinstance(obj, list):
        return [_from_dynamo(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _from_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    return obj
