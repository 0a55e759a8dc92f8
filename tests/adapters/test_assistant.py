# tests/adapters/test_assistant.py
import pytest

from adapters.assistant import AssistantV1
from core.domain.assistant import Context, CreateExample, CreateValue, Snapshot
from core.errors import NotFoundError

WS = "/assistant/api/v1/workspaces"

WORKSPACE = {
    "name": "Car dashboard",
    "language": "en",
    "workspace_id": "ws1",
    "created": "2018-07-10T12:00:00.000Z",
}

MESSAGE_RESPONSE = {
    "input": {"text": "turn on the lights"},
    "intents": [{"intent": "turn_on", "confidence": 0.97}, {"intent": "greeting", "confidence": 0.1}],
    "entities": [{"entity": "appliance", "location": [12, 18], "value": "lights", "confidence": 1}],
    "context": {"conversation_id": "conv-1", "system": {"dialog_turn_counter": 1}},
    "output": {"text": ["Turning on the lights."], "nodes_visited": ["node_1"], "log_messages": []},
}


def _analytics(operation_id: str) -> str:
    return f"service_name=conversation;service_version=v1;operation_id={operation_id}"


class TestConstruction:

    def test_version_is_required(self, settings):
        settings.assistant_version = None
        with pytest.raises(ValueError, match="version cannot be None"):
            AssistantV1(username="u", password="p", settings=settings)

    def test_version_falls_back_to_settings(self, settings):
        service = AssistantV1(username="u", password="p", settings=settings)
        assert service.version == "2018-07-10"

    def test_credentials_fall_back_to_settings(self, settings):
        settings.assistant_apikey = "from-env"
        service = AssistantV1("2018-07-10", settings=settings)
        assert service.token_manager is not None
        assert service.token_manager.apikey == "from-env"

    def test_explicit_url_wins(self, settings):
        service = AssistantV1("2018-07-10", url="https://custom/api/", username="u", password="p", settings=settings)
        assert service.url == "https://custom/api"


@pytest.mark.asyncio
class TestMessage:

    async def test_message_with_text_shortcut(self, assistant, mock_api):
        # Arrange
        mock_api.add("POST", f"{WS}/ws1/message", json_body=MESSAGE_RESPONSE)

        # Act
        response = await assistant.message(
            "ws1",
            input="turn on the lights",
            context=Context(conversation_id="conv-1"),
            alternate_intents=True,
        )

        # Assert
        request = mock_api.last
        assert request.url.params["version"] == "2018-07-10"
        assert request.headers["X-IBMCloud-SDK-Analytics"] == _analytics("message")
        assert mock_api.last_json() == {
            "input": {"text": "turn on the lights"},
            "alternate_intents": True,
            "context": {"conversation_id": "conv-1"},
        }
        assert response.top_intent.intent == "turn_on"
        assert response.entities[0].value == "lights"
        assert response.output.text == ["Turning on the lights."]
        assert response.context.conversation_id == "conv-1"
        assert response.context.system == {"dialog_turn_counter": 1}

    async def test_message_without_input_sends_empty_body(self, assistant, mock_api):
        mock_api.add("POST", f"{WS}/ws1/message", json_body={"output": {"text": ["Hello"]}})

        response = await assistant.message("ws1")

        assert mock_api.last_json() == {}
        assert response.top_intent is None
        assert response.output.text == ["Hello"]

    async def test_message_requires_workspace(self, assistant):
        with pytest.raises(ValueError, match="workspace_id cannot be None"):
            await assistant.message("", input="hi")


@pytest.mark.asyncio
class TestWorkspaces:

    async def test_list_workspaces_paging_params(self, assistant, mock_api):
        mock_api.add("GET", WS, json_body={"workspaces": [WORKSPACE], "pagination": {"refresh_url": "/x"}})

        page = await assistant.list_workspaces(page_limit=5, include_count=True, sort="name")

        params = mock_api.last.url.params
        assert params["page_limit"] == "5"
        assert params["include_count"] == "true"
        assert params["sort"] == "name"
        assert "cursor" not in params
        assert page.workspaces[0].workspace_id == "ws1"
        assert page.workspaces[0].created.year == 2018

    async def test_iter_workspaces_follows_cursor(self, assistant, mock_api):
        """
        Scenario: two pages linked by pagination.next_cursor.
        Expected: the iterator yields every workspace and sends the cursor.
        """
        mock_api.add(
            "GET",
            WS,
            json_body={"workspaces": [WORKSPACE], "pagination": {"next_cursor": "c2"}},
        )
        mock_api.add(
            "GET",
            WS,
            json_body={"workspaces": [dict(WORKSPACE, workspace_id="ws2")], "pagination": {}},
        )

        ids = [ws.workspace_id async for ws in assistant.iter_workspaces(page_limit=1)]

        assert ids == ["ws1", "ws2"]
        assert mock_api.requests[1].url.params["cursor"] == "c2"

    async def test_get_workspace_export(self, assistant, mock_api):
        mock_api.add(
            "GET",
            f"{WS}/ws1",
            json_body=dict(WORKSPACE, status="Available", intents=[{"intent": "turn_on"}]),
        )

        workspace = await assistant.get_workspace("ws1", export=True)

        assert mock_api.last.url.params["export"] == "true"
        assert workspace.intents[0].intent == "turn_on"

    async def test_delete_workspace_not_found(self, assistant, mock_api):
        mock_api.add("DELETE", f"{WS}/missing", json_body={"error": "Resource not found", "code": 404}, status=404)

        with pytest.raises(NotFoundError) as info:
            await assistant.delete_workspace("missing")

        assert info.value.message == "Resource not found"


@pytest.mark.asyncio
class TestIntentsAndEntities:

    async def test_update_intent_maps_new_fields(self, assistant, mock_api):
        mock_api.add("POST", f"{WS}/ws1/intents/greeting", json_body={"intent": "hello"})

        intent = await assistant.update_intent("ws1", "greeting", new_intent="hello", new_description="Greets")

        assert mock_api.last_json() == {"intent": "hello", "description": "Greets"}
        assert mock_api.last.headers["X-IBMCloud-SDK-Analytics"] == _analytics("updateIntent")
        assert intent.intent == "hello"

    async def test_example_text_is_encoded_in_path(self, assistant, mock_api):
        mock_api.add("POST", f"{WS}/ws1/intents/greeting/examples", json_body={"text": "good morning"}, status=201)
        mock_api.add("GET", f"{WS}/ws1/intents/greeting/examples/good morning", json_body={"text": "good morning"})

        created = await assistant.create_example("ws1", "greeting", "good morning")
        fetched = await assistant.get_example("ws1", "greeting", "good morning")

        assert created.text == "good morning"
        assert fetched.text == "good morning"
        assert mock_api.last.url.raw_path.startswith(b"/assistant/api/v1/workspaces/ws1/intents/greeting/examples/good%20morning")

    async def test_create_entity_with_values_uses_vendor_names(self, assistant, mock_api):
        mock_api.add("POST", f"{WS}/ws1/entities", json_body={"entity": "beverage"}, status=201)

        await assistant.create_entity(
            "ws1",
            "beverage",
            values=[CreateValue(value="coffee", value_type="synonyms", synonyms=["espresso"])],
            fuzzy_match=True,
        )

        assert mock_api.last_json() == {
            "entity": "beverage",
            "values": [{"value": "coffee", "type": "synonyms", "synonyms": ["espresso"]}],
            "fuzzy_match": True,
        }

    async def test_create_dialog_node_type_alias(self, assistant, mock_api):
        mock_api.add(
            "POST",
            f"{WS}/ws1/dialog_nodes",
            json_body={"dialog_node": "node_1", "type": "standard", "conditions": "#greeting"},
            status=201,
        )

        node = await assistant.create_dialog_node("ws1", "node_1", conditions="#greeting", node_type="standard")

        assert mock_api.last_json() == {"dialog_node": "node_1", "conditions": "#greeting", "type": "standard"}
        assert node.node_type == "standard"


@pytest.mark.asyncio
class TestLogsAndUserData:

    async def test_list_all_logs_requires_filter(self, assistant):
        with pytest.raises(ValueError):
            await assistant.list_all_logs("")

    async def test_list_all_logs(self, assistant, mock_api):
        mock_api.add("GET", "/assistant/api/v1/logs", json_body={"logs": [], "pagination": {}})

        logs = await assistant.list_all_logs("language::en", page_limit=10)

        assert mock_api.last.url.params["filter"] == "language::en"
        assert logs.logs == []

    async def test_delete_user_data(self, assistant, mock_api):
        mock_api.add("DELETE", "/assistant/api/v1/user_data", status=202)

        await assistant.delete_user_data("customer-1")

        assert mock_api.last.url.params["customer_id"] == "customer-1"


@pytest.mark.asyncio
class TestSnapshots:

    async def test_create_snapshot_has_no_analytics_header(self, assistant, mock_api):
        mock_api.add(
            "POST",
            "/assistant/api/v1/workers/definitions/def1/snapshots",
            json_body={"id": "snap1", "worker_definition_id": "def1", "counts": {"intent": 3, "entity": 1, "node": 7}},
            status=201,
        )

        snapshot = await assistant.create_snapshot("def1", "nightly")

        assert mock_api.last_json() == {"description": "nightly"}
        assert "X-IBMCloud-SDK-Analytics" not in mock_api.last.headers
        assert snapshot.counts.node == 7

    async def test_delete_snapshot_is_not_versioned(self, assistant, mock_api):
        mock_api.add("DELETE", "/assistant/api/v1/workers/definitions/def1/snapshots/snap1", status=204)

        await assistant.delete_snapshot(Snapshot(id="snap1", worker_definition_id="def1"))

        assert "version" not in mock_api.last.url.params

    async def test_delete_snapshot_requires_ids(self, assistant):
        with pytest.raises(ValueError):
            await assistant.delete_snapshot(Snapshot(id="snap1"))

    async def test_get_snapshot_export(self, assistant, mock_api):
        path = "/assistant/api/v1/workers/definitions/def1/snapshots/snap1"
        mock_api.add("GET", path, json_body={"id": "snap1", "exported_data": {"intents": []}})

        snapshot = await assistant.get_snapshot("def1", "snap1", export=True)

        assert mock_api.last.url.params["export"] == "true"
        assert mock_api.last.url.params["version"] == "2018-07-10"
        assert snapshot.exported_data == {"intents": []}

    async def test_get_definitions(self, assistant, mock_api):
        mock_api.add(
            "GET",
            "/assistant/api/v1/workers/definitions",
            json_body={"definitions": [{"id": "def1", "config": {"workspace_id": "ws1"}}]},
        )

        definitions = await assistant.get_definitions()

        assert definitions.definitions[0].config.workspace_id == "ws1"


@pytest.mark.asyncio
class TestVendorPayloads:

    async def test_message_start_turn_with_empty_input(self, assistant, mock_api):
        """
        Scenario: first turn of a conversation, the service echoes `"input": {}`.
        Expected: the response parses and the input has no text.
        """
        mock_api.add(
            "POST",
            f"{WS}/ws1/message",
            json_body={
                "input": {},
                "intents": [],
                "entities": [],
                "context": {"conversation_id": "conv-1"},
                "output": {"text": ["Hi! How can I help?"], "log_messages": []},
            },
        )

        response = await assistant.message("ws1")

        assert response.input is not None
        assert response.input.text is None
        assert response.output.text == ["Hi! How can I help?"]

    async def test_list_logs_with_empty_input(self, assistant, mock_api):
        mock_api.add(
            "GET",
            f"{WS}/ws1/logs",
            json_body={
                "logs": [
                    {
                        "log_id": "log-1",
                        "request": {"input": {}},
                        "response": {"input": {}, "output": {"text": ["Welcome"]}},
                        "request_timestamp": "2018-07-10T12:00:00.000Z",
                        "response_timestamp": "2018-07-10T12:00:00.100Z",
                    }
                ],
                "pagination": {},
            },
        )

        logs = await assistant.list_logs("ws1")

        entry = logs.logs[0]
        assert entry.request.input.text is None
        assert entry.response.output.text == ["Welcome"]
        assert entry.workspace_id is None

    async def test_entity_without_location(self, assistant, mock_api):
        mock_api.add(
            "POST",
            f"{WS}/ws1/message",
            json_body={"entities": [{"entity": "sys-number", "value": "3"}]},
        )

        response = await assistant.message("ws1", input="three")

        assert response.entities[0].location is None


@pytest.mark.asyncio
class TestDialogNodePaging:

    async def test_iter_dialog_nodes_follows_cursor(self, assistant, mock_api):
        mock_api.add(
            "GET",
            f"{WS}/ws1/dialog_nodes",
            json_body={"dialog_nodes": [{"dialog_node": "n1"}], "pagination": {"next_cursor": "c2"}},
        )
        mock_api.add("GET", f"{WS}/ws1/dialog_nodes", json_body={"dialog_nodes": [{"dialog_node": "n2"}]})

        nodes = [node.dialog_node async for node in assistant.iter_dialog_nodes("ws1", page_limit=1)]

        assert nodes == ["n1", "n2"]
        assert mock_api.requests[0].url.params["page_limit"] == "1"
        assert mock_api.requests[1].url.params["cursor"] == "c2"


# Respuesta válida para cualquier modelo de Assistant (los modelos admiten campos extra).
ANY_RESOURCE = {
    "workspace_id": "ws1",
    "intent": "greeting",
    "text": "hey",
    "entity": "beverage",
    "value": "coffee",
    "synonym": "joe",
    "dialog_node": "node_1",
}

V1 = "/assistant/api/v1"
NIGHTLY = Snapshot(id="snap1", worker_definition_id="def1")

# (method, args, kwargs, verb, path, operation_id, body)
OPERATIONS = [
    ("message", ("ws1",), {"input": "hi"}, "POST", "/workspaces/ws1/message", "message", {"input": {"text": "hi"}}),
    ("create_workspace", (), {"name": "W", "language": "en"}, "POST", "/workspaces", "createWorkspace", {"name": "W", "language": "en"}),
    ("delete_workspace", ("ws1",), {}, "DELETE", "/workspaces/ws1", "deleteWorkspace", None),
    ("get_workspace", ("ws1",), {}, "GET", "/workspaces/ws1", "getWorkspace", None),
    ("list_workspaces", (), {}, "GET", "/workspaces", "listWorkspaces", None),
    ("update_workspace", ("ws1",), {"name": "N", "append": True}, "POST", "/workspaces/ws1", "updateWorkspace", {"name": "N"}),
    ("create_intent", ("ws1", "greeting"), {"description": "d"}, "POST", "/workspaces/ws1/intents", "createIntent", {"intent": "greeting", "description": "d"}),
    ("delete_intent", ("ws1", "greeting"), {}, "DELETE", "/workspaces/ws1/intents/greeting", "deleteIntent", None),
    ("get_intent", ("ws1", "greeting"), {"export": True}, "GET", "/workspaces/ws1/intents/greeting", "getIntent", None),
    ("list_intents", ("ws1",), {}, "GET", "/workspaces/ws1/intents", "listIntents", None),
    (
        "update_intent",
        ("ws1", "greeting"),
        {"new_intent": "hello", "new_examples": [CreateExample(text="hey")]},
        "POST",
        "/workspaces/ws1/intents/greeting",
        "updateIntent",
        {"intent": "hello", "examples": [{"text": "hey"}]},
    ),
    ("create_example", ("ws1", "greeting", "hey"), {}, "POST", "/workspaces/ws1/intents/greeting/examples", "createExample", {"text": "hey"}),
    ("delete_example", ("ws1", "greeting", "hey"), {}, "DELETE", "/workspaces/ws1/intents/greeting/examples/hey", "deleteExample", None),
    ("get_example", ("ws1", "greeting", "hey"), {}, "GET", "/workspaces/ws1/intents/greeting/examples/hey", "getExample", None),
    ("list_examples", ("ws1", "greeting"), {}, "GET", "/workspaces/ws1/intents/greeting/examples", "listExamples", None),
    ("update_example", ("ws1", "greeting", "hey"), {"new_text": "hi there"}, "POST", "/workspaces/ws1/intents/greeting/examples/hey", "updateExample", {"text": "hi there"}),
    ("create_counterexample", ("ws1", "spam"), {}, "POST", "/workspaces/ws1/counterexamples", "createCounterexample", {"text": "spam"}),
    ("delete_counterexample", ("ws1", "spam"), {}, "DELETE", "/workspaces/ws1/counterexamples/spam", "deleteCounterexample", None),
    ("get_counterexample", ("ws1", "spam"), {}, "GET", "/workspaces/ws1/counterexamples/spam", "getCounterexample", None),
    ("list_counterexamples", ("ws1",), {}, "GET", "/workspaces/ws1/counterexamples", "listCounterexamples", None),
    ("update_counterexample", ("ws1", "spam"), {"new_text": "junk"}, "POST", "/workspaces/ws1/counterexamples/spam", "updateCounterexample", {"text": "junk"}),
    ("create_entity", ("ws1", "beverage"), {"description": "d"}, "POST", "/workspaces/ws1/entities", "createEntity", {"entity": "beverage", "description": "d"}),
    ("delete_entity", ("ws1", "beverage"), {}, "DELETE", "/workspaces/ws1/entities/beverage", "deleteEntity", None),
    ("get_entity", ("ws1", "beverage"), {}, "GET", "/workspaces/ws1/entities/beverage", "getEntity", None),
    ("list_entities", ("ws1",), {}, "GET", "/workspaces/ws1/entities", "listEntities", None),
    (
        "update_entity",
        ("ws1", "beverage"),
        {"new_entity": "drink", "new_fuzzy_match": True},
        "POST",
        "/workspaces/ws1/entities/beverage",
        "updateEntity",
        {"entity": "drink", "fuzzy_match": True},
    ),
    ("list_mentions", ("ws1", "beverage"), {}, "GET", "/workspaces/ws1/entities/beverage/mentions", "listMentions", None),
    (
        "create_value",
        ("ws1", "beverage", "coffee"),
        {"synonyms": ["joe"], "value_type": "synonyms"},
        "POST",
        "/workspaces/ws1/entities/beverage/values",
        "createValue",
        {"value": "coffee", "synonyms": ["joe"], "type": "synonyms"},
    ),
    ("delete_value", ("ws1", "beverage", "coffee"), {}, "DELETE", "/workspaces/ws1/entities/beverage/values/coffee", "deleteValue", None),
    ("get_value", ("ws1", "beverage", "coffee"), {}, "GET", "/workspaces/ws1/entities/beverage/values/coffee", "getValue", None),
    ("list_values", ("ws1", "beverage"), {}, "GET", "/workspaces/ws1/entities/beverage/values", "listValues", None),
    (
        "update_value",
        ("ws1", "beverage", "coffee"),
        {"new_value": "tea", "new_value_type": "patterns", "new_patterns": ["t.a"]},
        "POST",
        "/workspaces/ws1/entities/beverage/values/coffee",
        "updateValue",
        {"value": "tea", "type": "patterns", "patterns": ["t.a"]},
    ),
    (
        "create_synonym",
        ("ws1", "beverage", "coffee", "joe"),
        {},
        "POST",
        "/workspaces/ws1/entities/beverage/values/coffee/synonyms",
        "createSynonym",
        {"synonym": "joe"},
    ),
    (
        "delete_synonym",
        ("ws1", "beverage", "coffee", "joe"),
        {},
        "DELETE",
        "/workspaces/ws1/entities/beverage/values/coffee/synonyms/joe",
        "deleteSynonym",
        None,
    ),
    (
        "get_synonym",
        ("ws1", "beverage", "coffee", "joe"),
        {},
        "GET",
        "/workspaces/ws1/entities/beverage/values/coffee/synonyms/joe",
        "getSynonym",
        None,
    ),
    (
        "list_synonyms",
        ("ws1", "beverage", "coffee"),
        {},
        "GET",
        "/workspaces/ws1/entities/beverage/values/coffee/synonyms",
        "listSynonyms",
        None,
    ),
    (
        "update_synonym",
        ("ws1", "beverage", "coffee", "joe"),
        {"new_synonym": "java"},
        "POST",
        "/workspaces/ws1/entities/beverage/values/coffee/synonyms/joe",
        "updateSynonym",
        {"synonym": "java"},
    ),
    ("create_dialog_node", ("ws1", "node_1"), {"title": "Start"}, "POST", "/workspaces/ws1/dialog_nodes", "createDialogNode", {"dialog_node": "node_1", "title": "Start"}),
    ("delete_dialog_node", ("ws1", "node_1"), {}, "DELETE", "/workspaces/ws1/dialog_nodes/node_1", "deleteDialogNode", None),
    ("get_dialog_node", ("ws1", "node_1"), {}, "GET", "/workspaces/ws1/dialog_nodes/node_1", "getDialogNode", None),
    ("list_dialog_nodes", ("ws1",), {}, "GET", "/workspaces/ws1/dialog_nodes", "listDialogNodes", None),
    (
        "update_dialog_node",
        ("ws1", "node_1"),
        {"new_dialog_node": "node_2", "new_node_type": "frame", "new_parent": "root"},
        "POST",
        "/workspaces/ws1/dialog_nodes/node_1",
        "updateDialogNode",
        {"dialog_node": "node_2", "type": "frame", "parent": "root"},
    ),
    ("list_all_logs", ("language::en",), {}, "GET", "/logs", "listAllLogs", None),
    ("list_logs", ("ws1",), {}, "GET", "/workspaces/ws1/logs", "listLogs", None),
    ("delete_user_data", ("customer-1",), {}, "DELETE", "/user_data", "deleteUserData", None),
    ("create_snapshot", ("def1", "nightly"), {}, "POST", "/workers/definitions/def1/snapshots", None, {"description": "nightly"}),
    ("delete_snapshot", (NIGHTLY,), {}, "DELETE", "/workers/definitions/def1/snapshots/snap1", None, None),
    ("get_definitions", (), {}, "GET", "/workers/definitions", None, None),
    ("get_definition", ("def1",), {}, "GET", "/workers/definitions/def1", None, None),
    ("get_snapshot", ("def1", "snap1"), {}, "GET", "/workers/definitions/def1/snapshots/snap1", None, None),
    ("get_snapshots", ("def1",), {}, "GET", "/workers/definitions/def1/snapshots", None, None),
]

UNVERSIONED = {"delete_snapshot"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "args", "kwargs", "verb", "path", "operation_id", "body"),
    OPERATIONS,
    ids=[row[0] for row in OPERATIONS],
)
async def test_operation_request_shape(assistant, mock_api, method, args, kwargs, verb, path, operation_id, body):
    mock_api.add(verb, V1 + path, json_body=ANY_RESOURCE)

    await getattr(assistant, method)(*args, **kwargs)

    request = mock_api.last
    assert request.method == verb
    assert request.url.path == V1 + path
    if operation_id is None:
        assert "X-IBMCloud-SDK-Analytics" not in request.headers
    else:
        assert request.headers["X-IBMCloud-SDK-Analytics"] == _analytics(operation_id)
    if method in UNVERSIONED:
        assert "version" not in request.url.params
    else:
        assert request.url.params["version"] == "2018-07-10"
    if body is not None:
        assert mock_api.last_json() == body
