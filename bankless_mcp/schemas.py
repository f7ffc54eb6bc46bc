"""
Input schemas for the Bankless MCP tools.

Each tool has one pydantic model. The same model is used to validate incoming
arguments and to render the JSON Schema advertised by ``tools/list``, so the two
can never drift apart. Address, contract and network values are opaque strings
here; their semantic validation belongs to the Bankless API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

NETWORK_DESCRIPTION = 'The blockchain network (e.g., "ethereum", "base")'

ArgsModel = TypeVar("ArgsModel", bound="ToolArguments")


class ToolArguments(BaseModel):
    """Base for tool argument models; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TypedValue(BaseModel):
    type: StrictStr = Field(description="The type of the input parameter")
    value: Any = Field(default=None, description="The value of the input parameter")


class TypedOutput(BaseModel):
    type: StrictStr = Field(description="The expected output type")


class ReadContractArgs(ToolArguments):
    network: StrictStr = Field(description='The blockchain network (e.g., "ethereum", "polygon")')
    contract: StrictStr = Field(description="The contract address")
    method: StrictStr = Field(description="The contract method to call")
    inputs: List[TypedValue] = Field(description="Input parameters for the method call")
    outputs: List[TypedOutput] = Field(description="Expected output types")


class ContractArgs(ToolArguments):
    network: StrictStr = Field(description=NETWORK_DESCRIPTION)
    contract: StrictStr = Field(description="The contract address")


class GetProxyArgs(ContractArgs):
    pass


class GetAbiArgs(ContractArgs):
    pass


class GetSourceArgs(ContractArgs):
    pass


class GetEventLogsArgs(ToolArguments):
    network: StrictStr = Field(description=NETWORK_DESCRIPTION)
    addresses: List[StrictStr] = Field(description="List of contract addresses to filter events")
    topic: StrictStr = Field(description="Primary topic to filter events")
    optional_topics: Optional[List[Optional[StrictStr]]] = Field(
        default=None,
        alias="optionalTopics",
        description="Optional additional topics",
    )


class BuildEventTopicArgs(ToolArguments):
    network: StrictStr = Field(description=NETWORK_DESCRIPTION)
    name: StrictStr = Field(description='Event name (e.g., "Transfer(address,address,uint256)")')
    arguments: List[TypedOutput] = Field(description="Event arguments types")


class TransactionHistoryArgs(ToolArguments):
    network: StrictStr = Field(description=NETWORK_DESCRIPTION)
    user: StrictStr = Field(description="The user address")
    contract: Optional[StrictStr] = Field(default=None, description="The contract address (optional)")
    method_id: Optional[StrictStr] = Field(
        default=None, alias="methodId", description="The method ID to filter by (optional)"
    )
    start_block: Optional[StrictStr] = Field(
        default=None, alias="startBlock", description="The starting block number (optional)"
    )
    include_data: StrictBool = Field(
        default=True, alias="includeData", description="Whether to include transaction data"
    )


class NativeBalanceArgs(ToolArguments):
    network: StrictStr = Field(description=NETWORK_DESCRIPTION)
    address: StrictStr = Field(description="The address to check the balance for")


class TokenBalancesOnNetworkArgs(ToolArguments):
    network: StrictStr = Field(description=NETWORK_DESCRIPTION)
    address: StrictStr = Field(description="The address to check token balances for")


def validate_arguments(model: Type[ArgsModel], raw: Mapping[str, Any]) -> ArgsModel:
    """Validate raw tool arguments; raises pydantic.ValidationError on violations."""
    return model.model_validate(raw)


def describe_schema(model: Type[ToolArguments]) -> Dict[str, Any]:
    """Render the JSON Schema advertised for a tool (camelCase property names)."""
    return model.model_json_schema(by_alias=True)
