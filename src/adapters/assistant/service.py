"""Cliente de Watson Assistant v1.

Cada operación es un mapeo directo (path + query + cuerpo JSON) a un verbo
HTTP. Los campos opcionales solo se envían cuando no son `None`.
"""

from __future__ import annotations

from typing import Any, AsyncIterator

import httpx

from adapters.watson_service import WatsonService
from core.config import DEFAULT_ASSISTANT_URL, AppSettings
from core.domain.assistant import (
    Context,
    Counterexample,
    CounterexampleCollection,
    CreateCounterexample,
    CreateDialogNode,
    CreateEntity,
    CreateExample,
    CreateIntent,
    CreateValue,
    Definition,
    DefinitionCollection,
    DialogNode,
    DialogNodeAction,
    DialogNodeCollection,
    DialogNodeNextStep,
    DialogNodeOutput,
    Entity,
    EntityCollection,
    EntityExport,
    EntityMentionCollection,
    Example,
    ExampleCollection,
    InputData,
    Intent,
    IntentCollection,
    IntentExport,
    LogCollection,
    Mentions,
    MessageResponse,
    OutputData,
    RuntimeEntity,
    RuntimeIntent,
    Snapshot,
    SnapshotCollection,
    Synonym,
    SynonymCollection,
    Value,
    ValueCollection,
    ValueExport,
    Workspace,
    WorkspaceCollection,
    WorkspaceExport,
    WorkspaceSystemSettings,
)
from core.domain.models import to_payload

_WORKSPACES = "v1/workspaces"
_DEFINITIONS = "v1/workers/definitions"


def _require(value: Any, name: str) -> None:
    if value is None or (isinstance(value, str) and not value):
        raise ValueError(f"{name} cannot be None")


def _body(**fields: Any) -> dict[str, Any]:
    return {key: to_payload(value) for key, value in fields.items() if value is not None}


def _paging(
    page_limit: int | None,
    include_count: bool | None,
    sort: str | None,
    cursor: str | None,
    include_audit: bool | None,
) -> dict[str, Any]:
    return {
        "page_limit": page_limit,
        "include_count": include_count,
        "sort": sort,
        "cursor": cursor,
        "include_audit": include_audit,
    }


class AssistantV1(WatsonService):
    """Cliente del servicio Assistant (antes Conversation).

    `version` es la fecha de versión de la API (`YYYY-MM-DD`) y es obligatoria.
    """

    def __init__(
        self,
        version: str | None = None,
        *,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        iam_apikey: str | None = None,
        iam_access_token: str | None = None,
        iam_url: str | None = None,
        settings: AppSettings | None = None,
        default_headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = settings or AppSettings()
        version = version or settings.assistant_version
        if not version:
            raise ValueError("version cannot be None")
        self.version = version

        has_explicit = any(v is not None for v in (username, password, iam_apikey, iam_access_token))
        if not has_explicit:
            iam_apikey = settings.assistant_apikey
            username = settings.assistant_username
            password = settings.assistant_password

        super().__init__(
            "assistant",
            settings.assistant_url or DEFAULT_ASSISTANT_URL,
            url=url,
            username=username,
            password=password,
            iam_apikey=iam_apikey,
            iam_access_token=iam_access_token,
            iam_url=iam_url,
            settings=settings,
            default_headers=default_headers,
            client=client,
        )

    async def _call(
        self,
        operation_id: str,
        method: str,
        path_segments: list[str],
        path_parameters: list[str] | None = None,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        versioned: bool = True,
        analytics: bool = True,
    ) -> Any:
        query: dict[str, Any] = {"version": self.version} if versioned else {}
        query.update(params or {})
        headers: dict[str, str] = {}
        if analytics:
            headers["X-IBMCloud-SDK-Analytics"] = (
                f"service_name=conversation;service_version=v1;operation_id={operation_id}"
            )
        return await self.request(
            method,
            path_segments,
            path_parameters,
            params=query,
            json=json,
            headers=headers,
        )

    # ------------------------------------------------------------------
    # Message
    # ------------------------------------------------------------------

    async def message(
        self,
        workspace_id: str,
        *,
        input: InputData | dict[str, Any] | str | None = None,
        alternate_intents: bool | None = None,
        context: Context | dict[str, Any] | None = None,
        entities: list[RuntimeEntity] | None = None,
        intents: list[RuntimeIntent] | None = None,
        output: OutputData | dict[str, Any] | None = None,
        nodes_visited_details: bool | None = None,
    ) -> MessageResponse:
        """Envía la entrada del usuario al workspace y devuelve la respuesta.

        `input` acepta un texto plano como atajo de `InputData(text=...)`.
        """

        _require(workspace_id, "workspace_id")
        if isinstance(input, str):
            input = InputData(text=input)
        data = await self._call(
            "message",
            "POST",
            [_WORKSPACES, "message"],
            [workspace_id],
            params={"nodes_visited_details": nodes_visited_details},
            json=_body(
                input=input,
                alternate_intents=alternate_intents,
                context=context,
                entities=entities,
                intents=intents,
                output=output,
            ),
        )
        return MessageResponse.model_validate(data)

    # ------------------------------------------------------------------
    # Workspaces
    # ------------------------------------------------------------------

    async def create_workspace(
        self,
        *,
        name: str | None = None,
        description: str | None = None,
        language: str | None = None,
        intents: list[CreateIntent] | None = None,
        entities: list[CreateEntity] | None = None,
        dialog_nodes: list[CreateDialogNode] | None = None,
        counterexamples: list[CreateCounterexample] | None = None,
        metadata: dict[str, Any] | None = None,
        learning_opt_out: bool | None = None,
        system_settings: WorkspaceSystemSettings | None = None,
    ) -> Workspace:
        data = await self._call(
            "createWorkspace",
            "POST",
            [_WORKSPACES],
            json=_body(
                name=name,
                description=description,
                language=language,
                intents=intents,
                entities=entities,
                dialog_nodes=dialog_nodes,
                counterexamples=counterexamples,
                metadata=metadata,
                learning_opt_out=learning_opt_out,
                system_settings=system_settings,
            ),
        )
        return Workspace.model_validate(data)

    async def delete_workspace(self, workspace_id: str) -> None:
        _require(workspace_id, "workspace_id")
        await self._call("deleteWorkspace", "DELETE", [_WORKSPACES], [workspace_id])

    async def get_workspace(
        self,
        workspace_id: str,
        *,
        export: bool | None = None,
        include_audit: bool | None = None,
        sort: str | None = None,
    ) -> WorkspaceExport:
        _require(workspace_id, "workspace_id")
        data = await self._call(
            "getWorkspace",
            "GET",
            [_WORKSPACES],
            [workspace_id],
            params={"export": export, "include_audit": include_audit, "sort": sort},
        )
        return WorkspaceExport.model_validate(data)

    async def list_workspaces(
        self,
        *,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> WorkspaceCollection:
        data = await self._call(
            "listWorkspaces",
            "GET",
            [_WORKSPACES],
            params=_paging(page_limit, include_count, sort, cursor, include_audit),
        )
        return WorkspaceCollection.model_validate(data)

    async def iter_workspaces(self, *, page_limit: int | None = None, sort: str | None = None) -> AsyncIterator[Workspace]:
        """Recorre todas las páginas siguiendo `pagination.next_cursor`."""

        cursor: str | None = None
        while True:
            page = await self.list_workspaces(page_limit=page_limit, sort=sort, cursor=cursor)
            for workspace in page.workspaces:
                yield workspace
            cursor = page.pagination.next_cursor if page.pagination else None
            if not cursor:
                return

    async def update_workspace(
        self,
        workspace_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        language: str | None = None,
        intents: list[CreateIntent] | None = None,
        entities: list[CreateEntity] | None = None,
        dialog_nodes: list[CreateDialogNode] | None = None,
        counterexamples: list[CreateCounterexample] | None = None,
        metadata: dict[str, Any] | None = None,
        learning_opt_out: bool | None = None,
        system_settings: WorkspaceSystemSettings | None = None,
        append: bool | None = None,
    ) -> Workspace:
        _require(workspace_id, "workspace_id")
        data = await self._call(
            "updateWorkspace",
            "POST",
            [_WORKSPACES],
            [workspace_id],
            params={"append": append},
            json=_body(
                name=name,
                description=description,
                language=language,
                intents=intents,
                entities=entities,
                dialog_nodes=dialog_nodes,
                counterexamples=counterexamples,
                metadata=metadata,
                learning_opt_out=learning_opt_out,
                system_settings=system_settings,
            ),
        )
        return Workspace.model_validate(data)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def create_intent(
        self,
        workspace_id: str,
        intent: str,
        *,
        description: str | None = None,
        examples: list[CreateExample] | None = None,
    ) -> Intent:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        data = await self._call(
            "createIntent",
            "POST",
            [_WORKSPACES, "intents"],
            [workspace_id],
            json=_body(intent=intent, description=description, examples=examples),
        )
        return Intent.model_validate(data)

    async def delete_intent(self, workspace_id: str, intent: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        await self._call("deleteIntent", "DELETE", [_WORKSPACES, "intents"], [workspace_id, intent])

    async def get_intent(
        self,
        workspace_id: str,
        intent: str,
        *,
        export: bool | None = None,
        include_audit: bool | None = None,
    ) -> IntentExport:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        data = await self._call(
            "getIntent",
            "GET",
            [_WORKSPACES, "intents"],
            [workspace_id, intent],
            params={"export": export, "include_audit": include_audit},
        )
        return IntentExport.model_validate(data)

    async def list_intents(
        self,
        workspace_id: str,
        *,
        export: bool | None = None,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> IntentCollection:
        _require(workspace_id, "workspace_id")
        params = {"export": export}
        params.update(_paging(page_limit, include_count, sort, cursor, include_audit))
        data = await self._call("listIntents", "GET", [_WORKSPACES, "intents"], [workspace_id], params=params)
        return IntentCollection.model_validate(data)

    async def update_intent(
        self,
        workspace_id: str,
        intent: str,
        *,
        new_intent: str | None = None,
        new_description: str | None = None,
        new_examples: list[CreateExample] | None = None,
    ) -> Intent:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        data = await self._call(
            "updateIntent",
            "POST",
            [_WORKSPACES, "intents"],
            [workspace_id, intent],
            json=_body(intent=new_intent, examples=new_examples, description=new_description),
        )
        return Intent.model_validate(data)

    # ------------------------------------------------------------------
    # Examples
    # ------------------------------------------------------------------

    async def create_example(
        self,
        workspace_id: str,
        intent: str,
        text: str,
        *,
        mentions: list[Mentions] | None = None,
    ) -> Example:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        _require(text, "text")
        data = await self._call(
            "createExample",
            "POST",
            [_WORKSPACES, "intents", "examples"],
            [workspace_id, intent],
            json=_body(text=text, mentions=mentions),
        )
        return Example.model_validate(data)

    async def delete_example(self, workspace_id: str, intent: str, text: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        _require(text, "text")
        await self._call(
            "deleteExample",
            "DELETE",
            [_WORKSPACES, "intents", "examples"],
            [workspace_id, intent, text],
        )

    async def get_example(
        self,
        workspace_id: str,
        intent: str,
        text: str,
        *,
        include_audit: bool | None = None,
    ) -> Example:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        _require(text, "text")
        data = await self._call(
            "getExample",
            "GET",
            [_WORKSPACES, "intents", "examples"],
            [workspace_id, intent, text],
            params={"include_audit": include_audit},
        )
        return Example.model_validate(data)

    async def list_examples(
        self,
        workspace_id: str,
        intent: str,
        *,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> ExampleCollection:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        data = await self._call(
            "listExamples",
            "GET",
            [_WORKSPACES, "intents", "examples"],
            [workspace_id, intent],
            params=_paging(page_limit, include_count, sort, cursor, include_audit),
        )
        return ExampleCollection.model_validate(data)

    async def update_example(
        self,
        workspace_id: str,
        intent: str,
        text: str,
        *,
        new_text: str | None = None,
        new_mentions: list[Mentions] | None = None,
    ) -> Example:
        _require(workspace_id, "workspace_id")
        _require(intent, "intent")
        _require(text, "text")
        data = await self._call(
            "updateExample",
            "POST",
            [_WORKSPACES, "intents", "examples"],
            [workspace_id, intent, text],
            json=_body(text=new_text, mentions=new_mentions),
        )
        return Example.model_validate(data)

    # ------------------------------------------------------------------
    # Counterexamples
    # ------------------------------------------------------------------

    async def create_counterexample(self, workspace_id: str, text: str) -> Counterexample:
        _require(workspace_id, "workspace_id")
        _require(text, "text")
        data = await self._call(
            "createCounterexample",
            "POST",
            [_WORKSPACES, "counterexamples"],
            [workspace_id],
            json=_body(text=text),
        )
        return Counterexample.model_validate(data)

    async def delete_counterexample(self, workspace_id: str, text: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(text, "text")
        await self._call(
            "deleteCounterexample",
            "DELETE",
            [_WORKSPACES, "counterexamples"],
            [workspace_id, text],
        )

    async def get_counterexample(
        self,
        workspace_id: str,
        text: str,
        *,
        include_audit: bool | None = None,
    ) -> Counterexample:
        _require(workspace_id, "workspace_id")
        _require(text, "text")
        data = await self._call(
            "getCounterexample",
            "GET",
            [_WORKSPACES, "counterexamples"],
            [workspace_id, text],
            params={"include_audit": include_audit},
        )
        return Counterexample.model_validate(data)

    async def list_counterexamples(
        self,
        workspace_id: str,
        *,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> CounterexampleCollection:
        _require(workspace_id, "workspace_id")
        data = await self._call(
            "listCounterexamples",
            "GET",
            [_WORKSPACES, "counterexamples"],
            [workspace_id],
            params=_paging(page_limit, include_count, sort, cursor, include_audit),
        )
        return CounterexampleCollection.model_validate(data)

    async def update_counterexample(
        self,
        workspace_id: str,
        text: str,
        *,
        new_text: str | None = None,
    ) -> Counterexample:
        _require(workspace_id, "workspace_id")
        _require(text, "text")
        data = await self._call(
            "updateCounterexample",
            "POST",
            [_WORKSPACES, "counterexamples"],
            [workspace_id, text],
            json=_body(text=new_text),
        )
        return Counterexample.model_validate(data)

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    async def create_entity(
        self,
        workspace_id: str,
        entity: str,
        *,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
        values: list[CreateValue] | None = None,
        fuzzy_match: bool | None = None,
    ) -> Entity:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        data = await self._call(
            "createEntity",
            "POST",
            [_WORKSPACES, "entities"],
            [workspace_id],
            json=_body(
                entity=entity,
                description=description,
                metadata=metadata,
                values=values,
                fuzzy_match=fuzzy_match,
            ),
        )
        return Entity.model_validate(data)

    async def delete_entity(self, workspace_id: str, entity: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        await self._call("deleteEntity", "DELETE", [_WORKSPACES, "entities"], [workspace_id, entity])

    async def get_entity(
        self,
        workspace_id: str,
        entity: str,
        *,
        export: bool | None = None,
        include_audit: bool | None = None,
    ) -> EntityExport:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        data = await self._call(
            "getEntity",
            "GET",
            [_WORKSPACES, "entities"],
            [workspace_id, entity],
            params={"export": export, "include_audit": include_audit},
        )
        return EntityExport.model_validate(data)

    async def list_entities(
        self,
        workspace_id: str,
        *,
        export: bool | None = None,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> EntityCollection:
        _require(workspace_id, "workspace_id")
        params = {"export": export}
        params.update(_paging(page_limit, include_count, sort, cursor, include_audit))
        data = await self._call("listEntities", "GET", [_WORKSPACES, "entities"], [workspace_id], params=params)
        return EntityCollection.model_validate(data)

    async def update_entity(
        self,
        workspace_id: str,
        entity: str,
        *,
        new_entity: str | None = None,
        new_description: str | None = None,
        new_metadata: dict[str, Any] | None = None,
        new_fuzzy_match: bool | None = None,
        new_values: list[CreateValue] | None = None,
    ) -> Entity:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        data = await self._call(
            "updateEntity",
            "POST",
            [_WORKSPACES, "entities"],
            [workspace_id, entity],
            json=_body(
                fuzzy_match=new_fuzzy_match,
                entity=new_entity,
                metadata=new_metadata,
                values=new_values,
                description=new_description,
            ),
        )
        return Entity.model_validate(data)

    async def list_mentions(
        self,
        workspace_id: str,
        entity: str,
        *,
        export: bool | None = None,
        include_audit: bool | None = None,
    ) -> EntityMentionCollection:
        """Ejemplos de intents que mencionan la entidad."""

        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        data = await self._call(
            "listMentions",
            "GET",
            [_WORKSPACES, "entities", "mentions"],
            [workspace_id, entity],
            params={"export": export, "include_audit": include_audit},
        )
        return EntityMentionCollection.model_validate(data)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    async def create_value(
        self,
        workspace_id: str,
        entity: str,
        value: str,
        *,
        metadata: dict[str, Any] | None = None,
        synonyms: list[str] | None = None,
        patterns: list[str] | None = None,
        value_type: str | None = None,
    ) -> Value:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        data = await self._call(
            "createValue",
            "POST",
            [_WORKSPACES, "entities", "values"],
            [workspace_id, entity],
            json=_body(value=value, metadata=metadata, synonyms=synonyms, patterns=patterns, type=value_type),
        )
        return Value.model_validate(data)

    async def delete_value(self, workspace_id: str, entity: str, value: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        await self._call(
            "deleteValue",
            "DELETE",
            [_WORKSPACES, "entities", "values"],
            [workspace_id, entity, value],
        )

    async def get_value(
        self,
        workspace_id: str,
        entity: str,
        value: str,
        *,
        export: bool | None = None,
        include_audit: bool | None = None,
    ) -> ValueExport:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        data = await self._call(
            "getValue",
            "GET",
            [_WORKSPACES, "entities", "values"],
            [workspace_id, entity, value],
            params={"export": export, "include_audit": include_audit},
        )
        return ValueExport.model_validate(data)

    async def list_values(
        self,
        workspace_id: str,
        entity: str,
        *,
        export: bool | None = None,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> ValueCollection:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        params = {"export": export}
        params.update(_paging(page_limit, include_count, sort, cursor, include_audit))
        data = await self._call(
            "listValues",
            "GET",
            [_WORKSPACES, "entities", "values"],
            [workspace_id, entity],
            params=params,
        )
        return ValueCollection.model_validate(data)

    async def update_value(
        self,
        workspace_id: str,
        entity: str,
        value: str,
        *,
        new_value: str | None = None,
        new_metadata: dict[str, Any] | None = None,
        new_value_type: str | None = None,
        new_synonyms: list[str] | None = None,
        new_patterns: list[str] | None = None,
    ) -> Value:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        data = await self._call(
            "updateValue",
            "POST",
            [_WORKSPACES, "entities", "values"],
            [workspace_id, entity, value],
            json=_body(
                synonyms=new_synonyms,
                type=new_value_type,
                metadata=new_metadata,
                patterns=new_patterns,
                value=new_value,
            ),
        )
        return Value.model_validate(data)

    # ------------------------------------------------------------------
    # Synonyms
    # ------------------------------------------------------------------

    async def create_synonym(self, workspace_id: str, entity: str, value: str, synonym: str) -> Synonym:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        _require(synonym, "synonym")
        data = await self._call(
            "createSynonym",
            "POST",
            [_WORKSPACES, "entities", "values", "synonyms"],
            [workspace_id, entity, value],
            json=_body(synonym=synonym),
        )
        return Synonym.model_validate(data)

    async def delete_synonym(self, workspace_id: str, entity: str, value: str, synonym: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        _require(synonym, "synonym")
        await self._call(
            "deleteSynonym",
            "DELETE",
            [_WORKSPACES, "entities", "values", "synonyms"],
            [workspace_id, entity, value, synonym],
        )

    async def get_synonym(
        self,
        workspace_id: str,
        entity: str,
        value: str,
        synonym: str,
        *,
        include_audit: bool | None = None,
    ) -> Synonym:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        _require(synonym, "synonym")
        data = await self._call(
            "getSynonym",
            "GET",
            [_WORKSPACES, "entities", "values", "synonyms"],
            [workspace_id, entity, value, synonym],
            params={"include_audit": include_audit},
        )
        return Synonym.model_validate(data)

    async def list_synonyms(
        self,
        workspace_id: str,
        entity: str,
        value: str,
        *,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> SynonymCollection:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        data = await self._call(
            "listSynonyms",
            "GET",
            [_WORKSPACES, "entities", "values", "synonyms"],
            [workspace_id, entity, value],
            params=_paging(page_limit, include_count, sort, cursor, include_audit),
        )
        return SynonymCollection.model_validate(data)

    async def update_synonym(
        self,
        workspace_id: str,
        entity: str,
        value: str,
        synonym: str,
        *,
        new_synonym: str | None = None,
    ) -> Synonym:
        _require(workspace_id, "workspace_id")
        _require(entity, "entity")
        _require(value, "value")
        _require(synonym, "synonym")
        data = await self._call(
            "updateSynonym",
            "POST",
            [_WORKSPACES, "entities", "values", "synonyms"],
            [workspace_id, entity, value, synonym],
            json=_body(synonym=new_synonym),
        )
        return Synonym.model_validate(data)

    # ------------------------------------------------------------------
    # Dialog nodes
    # ------------------------------------------------------------------

    async def create_dialog_node(
        self,
        workspace_id: str,
        dialog_node: str,
        *,
        description: str | None = None,
        conditions: str | None = None,
        parent: str | None = None,
        previous_sibling: str | None = None,
        output: DialogNodeOutput | dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        next_step: DialogNodeNextStep | None = None,
        actions: list[DialogNodeAction] | None = None,
        title: str | None = None,
        node_type: str | None = None,
        event_name: str | None = None,
        variable: str | None = None,
        digress_in: str | None = None,
        digress_out: str | None = None,
        digress_out_slots: str | None = None,
        user_label: str | None = None,
    ) -> DialogNode:
        _require(workspace_id, "workspace_id")
        _require(dialog_node, "dialog_node")
        data = await self._call(
            "createDialogNode",
            "POST",
            [_WORKSPACES, "dialog_nodes"],
            [workspace_id],
            json=_body(
                dialog_node=dialog_node,
                description=description,
                conditions=conditions,
                parent=parent,
                previous_sibling=previous_sibling,
                output=output,
                context=context,
                metadata=metadata,
                next_step=next_step,
                actions=actions,
                title=title,
                type=node_type,
                event_name=event_name,
                variable=variable,
                digress_in=digress_in,
                digress_out=digress_out,
                digress_out_slots=digress_out_slots,
                user_label=user_label,
            ),
        )
        return DialogNode.model_validate(data)

    async def delete_dialog_node(self, workspace_id: str, dialog_node: str) -> None:
        _require(workspace_id, "workspace_id")
        _require(dialog_node, "dialog_node")
        await self._call(
            "deleteDialogNode",
            "DELETE",
            [_WORKSPACES, "dialog_nodes"],
            [workspace_id, dialog_node],
        )

    async def get_dialog_node(
        self,
        workspace_id: str,
        dialog_node: str,
        *,
        include_audit: bool | None = None,
    ) -> DialogNode:
        _require(workspace_id, "workspace_id")
        _require(dialog_node, "dialog_node")
        data = await self._call(
            "getDialogNode",
            "GET",
            [_WORKSPACES, "dialog_nodes"],
            [workspace_id, dialog_node],
            params={"include_audit": include_audit},
        )
        return DialogNode.model_validate(data)

    async def list_dialog_nodes(
        self,
        workspace_id: str,
        *,
        page_limit: int | None = None,
        include_count: bool | None = None,
        sort: str | None = None,
        cursor: str | None = None,
        include_audit: bool | None = None,
    ) -> DialogNodeCollection:
        _require(workspace_id, "workspace_id")
        data = await self._call(
            "listDialogNodes",
            "GET",
            [_WORKSPACES, "dialog_nodes"],
            [workspace_id],
            params=_paging(page_limit, include_count, sort, cursor, include_audit),
        )
        return DialogNodeCollection.model_validate(data)

    async def iter_dialog_nodes(self, workspace_id: str, *, page_limit: int | None = None) -> AsyncIterator[DialogNode]:
        cursor: str | None = None
        while True:
            page = await self.list_dialog_nodes(workspace_id, page_limit=page_limit, cursor=cursor)
            for node in page.dialog_nodes:
                yield node
            cursor = page.pagination.next_cursor if page.pagination else None
            if not cursor:
                return

    async def update_dialog_node(
        self,
        workspace_id: str,
        dialog_node: str,
        *,
        new_dialog_node: str | None = None,
        new_description: str | None = None,
        new_conditions: str | None = None,
        new_parent: str | None = None,
        new_previous_sibling: str | None = None,
        new_output: DialogNodeOutput | dict[str, Any] | None = None,
        new_context: dict[str, Any] | None = None,
        new_metadata: dict[str, Any] | None = None,
        new_next_step: DialogNodeNextStep | None = None,
        new_title: str | None = None,
        new_node_type: str | None = None,
        new_event_name: str | None = None,
        new_variable: str | None = None,
        new_actions: list[DialogNodeAction] | None = None,
        new_digress_in: str | None = None,
        new_digress_out: str | None = None,
        new_digress_out_slots: str | None = None,
        new_user_label: str | None = None,
    ) -> DialogNode:
        _require(workspace_id, "workspace_id")
        _require(dialog_node, "dialog_node")
        data = await self._call(
            "updateDialogNode",
            "POST",
            [_WORKSPACES, "dialog_nodes"],
            [workspace_id, dialog_node],
            json=_body(
                type=new_node_type,
                actions=new_actions,
                conditions=new_conditions,
                context=new_context,
                previous_sibling=new_previous_sibling,
                variable=new_variable,
                user_label=new_user_label,
                metadata=new_metadata,
                title=new_title,
                description=new_description,
                digress_out=new_digress_out,
                event_name=new_event_name,
                digress_out_slots=new_digress_out_slots,
                next_step=new_next_step,
                digress_in=new_digress_in,
                output=new_output,
                parent=new_parent,
                dialog_node=new_dialog_node,
            ),
        )
        return DialogNode.model_validate(data)

    # ------------------------------------------------------------------
    # Logs / user data
    # ------------------------------------------------------------------

    async def list_all_logs(
        self,
        filter: str,
        *,
        sort: str | None = None,
        page_limit: int | None = None,
        cursor: str | None = None,
    ) -> LogCollection:
        """Logs de todos los workspaces; `filter` debe incluir `language::` o `workspace_id::`."""

        _require(filter, "filter")
        data = await self._call(
            "listAllLogs",
            "GET",
            ["v1/logs"],
            params={"filter": filter, "sort": sort, "page_limit": page_limit, "cursor": cursor},
        )
        return LogCollection.model_validate(data)

    async def list_logs(
        self,
        workspace_id: str,
        *,
        sort: str | None = None,
        filter: str | None = None,
        page_limit: int | None = None,
        cursor: str | None = None,
    ) -> LogCollection:
        _require(workspace_id, "workspace_id")
        data = await self._call(
            "listLogs",
            "GET",
            [_WORKSPACES, "logs"],
            [workspace_id],
            params={"sort": sort, "filter": filter, "page_limit": page_limit, "cursor": cursor},
        )
        return LogCollection.model_validate(data)

    async def delete_user_data(self, customer_id: str) -> None:
        """Borra todos los datos asociados a un `customer_id`."""

        _require(customer_id, "customer_id")
        await self._call("deleteUserData", "DELETE", ["v1/user_data"], params={"customer_id": customer_id})

    # ------------------------------------------------------------------
    # Worker definitions / snapshots
    # ------------------------------------------------------------------

    async def create_snapshot(self, definition_id: str, description: str | None = None) -> Snapshot:
        _require(definition_id, "definition_id")
        data = await self._call(
            "createSnapshot",
            "POST",
            [_DEFINITIONS, "snapshots"],
            [definition_id],
            json=_body(description=description),
            analytics=False,
        )
        return Snapshot.model_validate(data)

    async def delete_snapshot(self, snapshot: Snapshot) -> None:
        """Borra un snapshot; usa `worker_definition_id` e `id` del propio modelo."""

        _require(snapshot.worker_definition_id, "snapshot.worker_definition_id")
        _require(snapshot.id, "snapshot.id")
        await self._call(
            "deleteSnapshot",
            "DELETE",
            [_DEFINITIONS, "snapshots"],
            [snapshot.worker_definition_id, snapshot.id],  # type: ignore[list-item]
            versioned=False,
            analytics=False,
        )

    async def get_definitions(self) -> DefinitionCollection:
        data = await self._call("getDefinitions", "GET", [_DEFINITIONS], analytics=False)
        return DefinitionCollection.model_validate(data)

    async def get_definition(self, definition_id: str) -> Definition:
        _require(definition_id, "definition_id")
        data = await self._call("getDefinition", "GET", [_DEFINITIONS], [definition_id], analytics=False)
        return Definition.model_validate(data)

    async def get_snapshot(self, definition_id: str, snapshot_id: str, *, export: bool = False) -> Snapshot:
        _require(definition_id, "definition_id")
        _require(snapshot_id, "snapshot_id")
        data = await self._call(
            "getSnapshot",
            "GET",
            [_DEFINITIONS, "snapshots"],
            [definition_id, snapshot_id],
            params={"export": "true"} if export else None,
            analytics=False,
        )
        return Snapshot.model_validate(data)

    async def get_snapshots(self, definition_id: str) -> SnapshotCollection:
        _require(definition_id, "definition_id")
        data = await self._call(
            "getSnapshots",
            "GET",
            [_DEFINITIONS, "snapshots"],
            [definition_id],
            analytics=False,
        )
        return SnapshotCollection.model_validate(data)
