"""Modelos de Assistant v1 (workspaces, intents, entities, dialog nodes...).

Reflejan el JSON del proveedor; los conceptos (Workspace, Intent, Entity,
DialogNode) son opacos para el cliente.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from core.domain.models import WatsonModel


class Pagination(WatsonModel):
    """Información de paginación de una colección."""

    refresh_url: str | None = None
    next_url: str | None = None
    total: int | None = None
    matched: int | None = None
    refresh_cursor: str | None = None
    next_cursor: str | None = None


# ---------------------------------------------------------------------------
# Message
# ---------------------------------------------------------------------------


class InputData(WatsonModel):
    """Entrada de un turno. En el primer turno de una conversación llega vacía."""

    text: str | None = Field(default=None, description="Texto del usuario.")


class MessageContextMetadata(WatsonModel):
    deployment: str | None = None
    user_id: str | None = None


class Context(WatsonModel):
    """Estado de la conversación; se devuelve y se reenvía en cada turno."""

    conversation_id: str | None = None
    system: dict[str, Any] | None = None
    metadata: MessageContextMetadata | None = None


class CaptureGroup(WatsonModel):
    group: str
    location: list[int] | None = None


class RuntimeIntent(WatsonModel):
    intent: str
    confidence: float


class RuntimeEntity(WatsonModel):
    entity: str
    location: list[int] | None = None
    value: str
    confidence: float | None = None
    metadata: dict[str, Any] | None = None
    groups: list[CaptureGroup] | None = None


class LogMessage(WatsonModel):
    level: str
    msg: str


class DialogNodeVisitedDetails(WatsonModel):
    dialog_node: str | None = None
    title: str | None = None
    conditions: str | None = None


class OutputData(WatsonModel):
    log_messages: list[LogMessage] = Field(default_factory=list)
    text: list[str] = Field(default_factory=list)
    generic: list[dict[str, Any]] | None = None
    nodes_visited: list[str] | None = None
    nodes_visited_details: list[DialogNodeVisitedDetails] | None = None


class DialogNodeAction(WatsonModel):
    name: str
    action_type: str | None = Field(default=None, alias="type")
    parameters: dict[str, Any] | None = None
    result_variable: str | None = None
    credentials: str | None = None


class MessageRequest(WatsonModel):
    input: InputData | None = None
    alternate_intents: bool | None = None
    context: Context | None = None
    entities: list[RuntimeEntity] | None = None
    intents: list[RuntimeIntent] | None = None
    output: OutputData | None = None


class MessageResponse(WatsonModel):
    """Respuesta de `message`: intents/entities detectados y salida del diálogo."""

    input: InputData | None = None
    intents: list[RuntimeIntent] = Field(default_factory=list)
    entities: list[RuntimeEntity] = Field(default_factory=list)
    alternate_intents: bool | None = None
    context: Context = Field(default_factory=Context)
    output: OutputData = Field(default_factory=OutputData)
    actions: list[DialogNodeAction] | None = None

    @property
    def top_intent(self) -> RuntimeIntent | None:
        return self.intents[0] if self.intents else None


# ---------------------------------------------------------------------------
# Intents / examples / counterexamples
# ---------------------------------------------------------------------------


class Mentions(WatsonModel):
    entity: str
    location: list[int] | None = None


class Example(WatsonModel):
    text: str
    mentions: list[Mentions] | None = None
    created: datetime | None = None
    updated: datetime | None = None


class CreateExample(WatsonModel):
    text: str
    mentions: list[Mentions] | None = None


class ExampleCollection(WatsonModel):
    examples: list[Example] = Field(default_factory=list)
    pagination: Pagination | None = None


class Intent(WatsonModel):
    intent: str
    description: str | None = None
    created: datetime | None = None
    updated: datetime | None = None


class IntentExport(Intent):
    examples: list[Example] | None = None


class CreateIntent(WatsonModel):
    intent: str
    description: str | None = None
    examples: list[CreateExample] | None = None


class IntentCollection(WatsonModel):
    intents: list[IntentExport] = Field(default_factory=list)
    pagination: Pagination | None = None


class Counterexample(WatsonModel):
    text: str
    created: datetime | None = None
    updated: datetime | None = None


class CreateCounterexample(WatsonModel):
    text: str


class CounterexampleCollection(WatsonModel):
    counterexamples: list[Counterexample] = Field(default_factory=list)
    pagination: Pagination | None = None


# ---------------------------------------------------------------------------
# Entities / values / synonyms
# ---------------------------------------------------------------------------


class Synonym(WatsonModel):
    synonym: str
    created: datetime | None = None
    updated: datetime | None = None


class SynonymCollection(WatsonModel):
    synonyms: list[Synonym] = Field(default_factory=list)
    pagination: Pagination | None = None


class Value(WatsonModel):
    value: str
    metadata: dict[str, Any] | None = None
    value_type: str | None = Field(
        default=None,
        alias="type",
        description="'synonyms' o 'patterns'.",
    )
    synonyms: list[str] | None = None
    patterns: list[str] | None = None
    created: datetime | None = None
    updated: datetime | None = None


class ValueExport(Value):
    pass


class CreateValue(WatsonModel):
    value: str
    metadata: dict[str, Any] | None = None
    value_type: str | None = Field(default=None, alias="type")
    synonyms: list[str] | None = None
    patterns: list[str] | None = None


class ValueCollection(WatsonModel):
    values: list[ValueExport] = Field(default_factory=list)
    pagination: Pagination | None = None


class Entity(WatsonModel):
    entity: str
    description: str | None = None
    metadata: dict[str, Any] | None = None
    fuzzy_match: bool | None = None
    created: datetime | None = None
    updated: datetime | None = None


class EntityExport(Entity):
    values: list[ValueExport] | None = None


class CreateEntity(WatsonModel):
    entity: str
    description: str | None = None
    metadata: dict[str, Any] | None = None
    values: list[CreateValue] | None = None
    fuzzy_match: bool | None = None


class EntityCollection(WatsonModel):
    entities: list[EntityExport] = Field(default_factory=list)
    pagination: Pagination | None = None


class EntityMention(WatsonModel):
    example_text: str = Field(..., alias="text")
    intent: str | None = None
    location: list[int] | None = None


class EntityMentionCollection(WatsonModel):
    examples: list[EntityMention] = Field(default_factory=list)
    pagination: Pagination | None = None


# ---------------------------------------------------------------------------
# Dialog nodes
# ---------------------------------------------------------------------------


class DialogNodeNextStep(WatsonModel):
    behavior: str
    dialog_node: str | None = None
    selector: str | None = None


class DialogNodeOutput(WatsonModel):
    generic: list[dict[str, Any]] | None = None
    modifiers: dict[str, Any] | None = None


class DialogNode(WatsonModel):
    """Nodo del árbol de diálogo."""

    dialog_node: str
    description: str | None = None
    conditions: str | None = None
    parent: str | None = None
    previous_sibling: str | None = None
    output: DialogNodeOutput | None = None
    context: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    next_step: DialogNodeNextStep | None = None
    title: str | None = None
    node_type: str | None = Field(default=None, alias="type")
    event_name: str | None = None
    variable: str | None = None
    actions: list[DialogNodeAction] | None = None
    digress_in: str | None = None
    digress_out: str | None = None
    digress_out_slots: str | None = None
    user_label: str | None = None
    disabled: bool | None = None
    created: datetime | None = None
    updated: datetime | None = None


class CreateDialogNode(WatsonModel):
    dialog_node: str
    description: str | None = None
    conditions: str | None = None
    parent: str | None = None
    previous_sibling: str | None = None
    output: DialogNodeOutput | None = None
    context: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    next_step: DialogNodeNextStep | None = None
    actions: list[DialogNodeAction] | None = None
    title: str | None = None
    node_type: str | None = Field(default=None, alias="type")
    event_name: str | None = None
    variable: str | None = None
    digress_in: str | None = None
    digress_out: str | None = None
    digress_out_slots: str | None = None
    user_label: str | None = None


class DialogNodeCollection(WatsonModel):
    dialog_nodes: list[DialogNode] = Field(default_factory=list)
    pagination: Pagination | None = None


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


class WorkspaceSystemSettings(WatsonModel):
    tooling: dict[str, Any] | None = None
    disambiguation: dict[str, Any] | None = None
    human_agent_assist: dict[str, Any] | None = None


class Workspace(WatsonModel):
    workspace_id: str
    name: str | None = None
    language: str | None = None
    description: str | None = None
    metadata: dict[str, Any] | None = None
    learning_opt_out: bool | None = None
    system_settings: WorkspaceSystemSettings | None = None
    created: datetime | None = None
    updated: datetime | None = None


class WorkspaceExport(Workspace):
    status: str | None = None
    intents: list[IntentExport] | None = None
    entities: list[EntityExport] | None = None
    counterexamples: list[Counterexample] | None = None
    dialog_nodes: list[DialogNode] | None = None


class WorkspaceCollection(WatsonModel):
    workspaces: list[Workspace] = Field(default_factory=list)
    pagination: Pagination | None = None


# ---------------------------------------------------------------------------
# Logs
# ---------------------------------------------------------------------------


class Log(WatsonModel):
    log_id: str | None = None
    request: MessageRequest = Field(default_factory=MessageRequest)
    response: MessageResponse = Field(default_factory=MessageResponse)
    request_timestamp: str | None = None
    response_timestamp: str | None = None
    workspace_id: str | None = None
    language: str | None = None


class LogCollection(WatsonModel):
    logs: list[Log] = Field(default_factory=list)
    pagination: Pagination | None = None


# ---------------------------------------------------------------------------
# Worker definitions / snapshots
# ---------------------------------------------------------------------------


class DefinitionConfig(WatsonModel):
    workspace_id: str | None = None


class Definition(WatsonModel):
    """Definición de worker (skill desplegado)."""

    id: str | None = None
    name: str | None = None
    worker_template_id: str | None = None
    config: DefinitionConfig | None = None
    tenant_id: str | None = None
    version: str | None = None
    description: str | None = None
    skill_reference: str | None = None
    next_skill_version: str | None = None
    timestamp_created: str | None = None
    timestamp_modified: str | None = None


class DefinitionCollection(WatsonModel):
    definitions: list[Definition] = Field(default_factory=list)


class SnapshotCounts(WatsonModel):
    intent: int | None = None
    entity: int | None = None
    node: int | None = None


class Snapshot(WatsonModel):
    """Snapshot de un worker definition."""

    id: str | None = None
    description: str | None = None
    snapshot_name: str | None = None
    workspace_id: str | None = None
    worker_definition_id: str | None = None
    reference_id: str | None = None
    tenant_id: str | None = None
    timestamp_created: str | None = None
    counts: SnapshotCounts | None = None
    exported_data: dict[str, Any] | None = None


class SnapshotCollection(WatsonModel):
    snapshots: list[Snapshot] = Field(default_factory=list)
