"""
Ordered revue CRUD scenario
Seven steps sharing one ScenarioState, run strictly in the order of STEPS
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from revue_suite.core.data_factory import DataFactory
from revue_suite.core.response_shapes import extract_revue_array, last_revue_id
from revue_suite.core.rest_client import ApiResponse, RestClient

logger = logging.getLogger(__name__)

CREATE_ENDPOINT = "/api/Revue/Create"
LIST_ENDPOINT = "/api/Revue/All"
EDIT_ENDPOINT = "/api/Revue/Edit"
DELETE_ENDPOINT = "/api/Revue/Delete"

NON_EXISTING_ID = "non-existing-id"

MSG_CREATED = "Successfully created!"
MSG_EDITED = "Edited successfully"
MSG_DELETED = "The revue is deleted!"
MSG_NO_SUCH_REVUE = "There is no such revue!"

MISSING_ID_ERROR = "lastRevueId is empty. Did the listing step fail?"


@dataclass
class ScenarioState:
    """State threaded between dependent steps"""
    last_revue_id: Optional[str] = None
    created_title: Optional[str] = None
    last_listed_title: Optional[str] = None

    def require_revue_id(self) -> str:
        if not self.last_revue_id or not self.last_revue_id.strip():
            raise AssertionError(MISSING_ID_ERROR)
        return self.last_revue_id


@dataclass
class StepResult:
    """Outcome of a single scenario step"""
    order: int
    name: str
    success: bool
    duration: float
    errors: List[str] = field(default_factory=list)
    status_code: Optional[int] = None
    message: Optional[str] = None


@dataclass
class ScenarioReport:
    results: List[StepResult]

    @property
    def passed(self) -> List[StepResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[StepResult]:
        return [r for r in self.results if not r.success]

    @property
    def all_passed(self) -> bool:
        return bool(self.results) and not self.failed

    def summary(self) -> str:
        lines = []
        for r in self.results:
            mark = "PASS" if r.success else "FAIL"
            line = f"{r.order}. {r.name:<38} {mark} ({r.duration:.3f}s)"
            if r.errors:
                line += f" - {'; '.join(r.errors)}"
            lines.append(line)
        lines.append(f"{len(self.passed)}/{len(self.results)} steps passed")
        return "\n".join(lines)


# (order, step name, RevueScenario coroutine method)
STEPS = [
    (1, "CreateRevue", "create_revue"),
    (2, "GetAllRevues", "list_revues"),
    (3, "EditLastRevue", "edit_last_revue"),
    (4, "DeleteLastRevue", "delete_last_revue"),
    (5, "CreateRevueWithoutRequiredFields", "create_revue_without_required_fields"),
    (6, "EditNonExistingRevue", "edit_non_existing_revue"),
    (7, "DeleteNonExistingRevue", "delete_non_existing_revue"),
]


class StepAssertionError(AssertionError):
    """Failed expectation that still carries the response it was made against"""

    def __init__(self, message: str, response: Optional[ApiResponse] = None):
        super().__init__(message)
        self.response = response


def expect_status(response: ApiResponse, expected: int):
    if response.status_code != expected:
        raise StepAssertionError(f"Expected HTTP {expected}, got {response.status_code}: {response.text}", response)


def expect_message(response: ApiResponse, expected: str) -> str:
    actual = response.api_message().msg
    if actual != expected:
        raise StepAssertionError(f"Expected msg '{expected}', got '{actual}': {response.text}", response)
    return actual


class RevueScenario:
    """Revue CRUD steps against an authenticated client"""

    def __init__(self, client: RestClient, state: Optional[ScenarioState] = None,
                 data_factory: Optional[DataFactory] = None):
        self.client = client
        self.state = state if state is not None else ScenarioState()
        self.data_factory = data_factory or DataFactory(client.config)

    async def _run_step(self, order: int, name: str,
                        action: Callable[[], Awaitable[ApiResponse]]) -> StepResult:
        """Run one step; an AssertionError fails this step only"""
        start_time = time.time()
        try:
            response = await action()
        except AssertionError as e:
            duration = time.time() - start_time
            logger.warning(f"Step {order} {name} failed: {e}")
            failed = getattr(e, "response", None)
            return StepResult(order, name, False, duration, [str(e)],
                              failed.status_code if failed else None,
                              failed.api_message().msg if failed else None)

        duration = time.time() - start_time
        logger.info(f"Step {order} {name} passed in {duration:.3f}s")
        return StepResult(order, name, True, duration, [],
                          response.status_code, response.api_message().msg)

    # === STEP 1 ===
    async def create_revue(self) -> StepResult:
        async def action():
            revue = self.data_factory.generate_revue()
            response = await self.client.post(CREATE_ENDPOINT, revue.to_payload())
            expect_status(response, 200)
            expect_message(response, MSG_CREATED)
            self.state.created_title = revue.title
            return response
        return await self._run_step(1, "CreateRevue", action)

    # === STEP 2 ===
    async def list_revues(self) -> StepResult:
        async def action():
            response = await self.client.get(LIST_ENDPOINT)
            expect_status(response, 200)
            if not response.text.strip():
                raise StepAssertionError("Empty body.", response)

            try:
                revue_id = last_revue_id(response.json_body)
            except AssertionError as e:
                raise StepAssertionError(f"{e} {response.text}", response) from e
            self.state.last_revue_id = revue_id
            last_item = extract_revue_array(response.json_body)[-1]
            self.state.last_listed_title = last_item.get("title")
            return response
        return await self._run_step(2, "GetAllRevues", action)

    # === STEP 3 ===
    async def edit_last_revue(self) -> StepResult:
        async def action():
            revue_id = self.state.require_revue_id()
            revue = self.data_factory.generate_revue_update()
            response = await self.client.put(EDIT_ENDPOINT, revue.to_payload(), params={"revueId": revue_id})
            expect_status(response, 200)
            expect_message(response, MSG_EDITED)
            return response
        return await self._run_step(3, "EditLastRevue", action)

    # === STEP 4 ===
    async def delete_last_revue(self) -> StepResult:
        async def action():
            revue_id = self.state.require_revue_id()
            response = await self.client.delete(DELETE_ENDPOINT, params={"revueId": revue_id})
            expect_status(response, 200)
            expect_message(response, MSG_DELETED)
            return response
        return await self._run_step(4, "DeleteLastRevue", action)

    # === STEP 5 ===
    async def create_revue_without_required_fields(self) -> StepResult:
        async def action():
            revue = self.data_factory.generate_empty_revue()
            response = await self.client.post(CREATE_ENDPOINT, revue.to_payload())
            expect_status(response, 400)
            return response
        return await self._run_step(5, "CreateRevueWithoutRequiredFields", action)

    # === STEP 6 ===
    async def edit_non_existing_revue(self) -> StepResult:
        async def action():
            revue = self.data_factory.generate_fake_revue()
            response = await self.client.put(EDIT_ENDPOINT, revue.to_payload(), params={"revueId": NON_EXISTING_ID})
            expect_status(response, 400)
            expect_message(response, MSG_NO_SUCH_REVUE)
            return response
        return await self._run_step(6, "EditNonExistingRevue", action)

    # === STEP 7 ===
    async def delete_non_existing_revue(self) -> StepResult:
        async def action():
            response = await self.client.delete(DELETE_ENDPOINT, params={"revueId": NON_EXISTING_ID})
            expect_status(response, 400)
            expect_message(response, MSG_NO_SUCH_REVUE)
            return response
        return await self._run_step(7, "DeleteNonExistingRevue", action)

    # === SUPPLEMENTARY CHECKS ===
    async def delete_last_revue_again(self) -> StepResult:
        """A revue deleted once behaves like a non-existing one"""
        async def action():
            revue_id = self.state.require_revue_id()
            response = await self.client.delete(DELETE_ENDPOINT, params={"revueId": revue_id})
            expect_status(response, 400)
            expect_message(response, MSG_NO_SUCH_REVUE)
            return response
        return await self._run_step(8, "DeleteLastRevueAgain", action)

    def verify_listed_revue_is_created(self) -> StepResult:
        """The id threaded from listing belongs to the revue this run created"""
        errors = []
        if not self.state.created_title:
            errors.append("No revue was created in this run.")
        elif not self.data_factory.is_suite_title(self.state.last_listed_title):
            errors.append(f"Last listed revue '{self.state.last_listed_title}' was not created by this run")
        elif self.state.last_listed_title != self.state.created_title:
            errors.append(
                f"Last listed revue is '{self.state.last_listed_title}', "
                f"expected '{self.state.created_title}'"
            )
        return StepResult(0, "ListedRevueIsCreatedRevue", not errors, 0.0, errors)

    async def run_sequence(self) -> ScenarioReport:
        """Execute every step of STEPS in order, regardless of earlier failures"""
        results = []
        for order, name, method_name in STEPS:
            logger.info(f"Running step {order}: {name}")
            results.append(await getattr(self, method_name)())
        return ScenarioReport(results)
