"""
In-memory persistence adapter.

Dictionary-backed repositories and unit of work for tests and demos.
Writes are staged in the unit of work and only reach the store on
``commit()``; reads return copies, so callers never share entity
instances with the store.
"""
import copy
import itertools
import logging
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from bpm_core.domain.entities import (
    BaseEntity,
    Department,
    Process,
    ProcessExecution,
    ProcessStep,
    Role,
    User,
)
from bpm_core.domain.repositories import (
    DepartmentRepository,
    ProcessExecutionRepository,
    ProcessRepository,
    ProcessStepRepository,
    RoleRepository,
    UnitOfWork,
    UserRepository,
)


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)

Operation = Tuple[str, str, int, Optional[BaseEntity]]


class InMemoryIntegrityError(Exception):
    """Raised on commit when a storage-level unique constraint is violated."""


class InMemoryStore:
    """
    Committed state shared by every unit of work created over it.

    Tables are ``{id: entity}`` dictionaries keyed by table name.
    """

    TABLES = ("departments", "users", "roles", "processes", "process_steps", "process_executions")

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[int, BaseEntity]] = {name: {} for name in self.TABLES}
        self._sequences = {name: itertools.count(1) for name in self.TABLES}

    def next_id(self, table: str) -> int:
        return next(self._sequences[table])

    def seed(self, table: str, entity: BaseEntity) -> BaseEntity:
        """Put an entity straight into committed state (test fixtures)."""
        if entity.id is None:
            entity.assign_id(self.next_id(table))
        self.tables[table][entity.id] = copy.deepcopy(entity)
        return entity

    def apply(self, operations: List[Operation]) -> int:
        """Apply staged operations atomically."""
        tables = {name: dict(rows) for name, rows in self.tables.items()}
        for kind, table, entity_id, entity in operations:
            if kind == "delete":
                tables[table].pop(entity_id, None)
            else:
                tables[table][entity_id] = copy.deepcopy(entity)
        self._check_constraints(tables)
        self.tables = tables
        return len(operations)

    @staticmethod
    def _check_constraints(tables: Dict[str, Dict[int, BaseEntity]]) -> None:
        seen = set()
        for step in tables["process_steps"].values():
            key = (step.process_id, step.order)
            if key in seen:
                raise InMemoryIntegrityError(
                    f"Unique constraint (process_id, step_order) violated: {key}"
                )
            seen.add(key)

        # NULL department never collides, as in SQL
        seen = set()
        for process in tables["processes"].values():
            if process.department_id is None:
                continue
            key = (process.department_id, process.name)
            if key in seen:
                raise InMemoryIntegrityError(
                    f"Unique constraint (department_id, name) violated: {key}"
                )
            seen.add(key)


class InMemoryRepository(Generic[T]):
    """Repository over one table of an ``InMemoryStore``."""

    table: str = ""

    def __init__(self, store: InMemoryStore, uow: "InMemoryUnitOfWork") -> None:
        self._store = store
        self._uow = uow

    def _rows(self) -> Dict[int, T]:
        return self._store.tables[self.table]

    def _load(self, entity: T) -> T:
        return copy.deepcopy(entity)

    def _select(self, predicate: Callable[[T], bool]) -> List[T]:
        return [self._load(e) for e in self._rows().values() if predicate(e)]

    async def get_all(self) -> List[T]:
        return self._select(lambda e: True)

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        entity = self._rows().get(entity_id)
        return self._load(entity) if entity is not None else None

    async def insert(self, entity: T) -> None:
        if entity.id is None:
            entity.assign_id(self._store.next_id(self.table))
        self._uow.stage("insert", self.table, entity)

    async def update(self, entity: T) -> None:
        self._require(entity.id)
        self._uow.stage("update", self.table, entity)

    async def delete(self, entity_id: int) -> None:
        self._require(entity_id)
        self._uow.stage_delete(self.table, entity_id)

    def _require(self, entity_id: Optional[int]) -> None:
        """Raise LookupError unless the row is committed or staged in this unit of work."""
        exists = entity_id in self._rows()
        for kind, table, staged_id, _ in self._uow.staged:
            if table == self.table and staged_id == entity_id:
                exists = kind != "delete"
        if entity_id is None or not exists:
            raise LookupError(f"{self.table} row {entity_id!r} does not exist")


class InMemoryDepartmentRepository(InMemoryRepository[Department], DepartmentRepository):
    table = "departments"


class InMemoryUserRepository(InMemoryRepository[User], UserRepository):
    table = "users"


class InMemoryRoleRepository(InMemoryRepository[Role], RoleRepository):
    table = "roles"


class InMemoryProcessStepRepository(InMemoryRepository[ProcessStep], ProcessStepRepository):
    table = "process_steps"

    async def get_by_process_id(self, process_id: int) -> List[ProcessStep]:
        steps = self._select(lambda s: s.process_id == process_id)
        return sorted(steps, key=lambda s: s.order)


class InMemoryProcessExecutionRepository(
    InMemoryRepository[ProcessExecution], ProcessExecutionRepository
):
    table = "process_executions"

    async def get_by_process(self, process_id: int) -> List[ProcessExecution]:
        return self._select(lambda e: e.process_id == process_id)


class InMemoryProcessRepository(InMemoryRepository[Process], ProcessRepository):
    table = "processes"

    def _load(self, entity: Process) -> Process:
        steps = [
            copy.deepcopy(s)
            for s in self._store.tables["process_steps"].values()
            if s.process_id == entity.id
        ]
        return Process.reconstitute(
            id=entity.id,
            name=entity.name,
            department_id=entity.department_id,
            description=entity.description,
            created_by_id=entity.created_by_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            steps=steps,
        )

    async def get_by_department(self, department_id: int) -> List[Process]:
        return self._select(lambda p: p.department_id == department_id)


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work that stages writes until ``commit()``."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()
        self._staged: List[Operation] = []
        self.committed = False

        self._departments = InMemoryDepartmentRepository(self.store, self)
        self._users = InMemoryUserRepository(self.store, self)
        self._roles = InMemoryRoleRepository(self.store, self)
        self._processes = InMemoryProcessRepository(self.store, self)
        self._process_steps = InMemoryProcessStepRepository(self.store, self)
        self._process_executions = InMemoryProcessExecutionRepository(self.store, self)

    @property
    def departments(self) -> InMemoryDepartmentRepository:
        return self._departments

    @property
    def users(self) -> InMemoryUserRepository:
        return self._users

    @property
    def roles(self) -> InMemoryRoleRepository:
        return self._roles

    @property
    def processes(self) -> InMemoryProcessRepository:
        return self._processes

    @property
    def process_steps(self) -> InMemoryProcessStepRepository:
        return self._process_steps

    @property
    def process_executions(self) -> InMemoryProcessExecutionRepository:
        return self._process_executions

    @property
    def staged(self) -> List[Operation]:
        return list(self._staged)

    def stage(self, kind: str, table: str, entity: BaseEntity) -> None:
        self._staged.append((kind, table, entity.id, copy.deepcopy(entity)))

    def stage_delete(self, table: str, entity_id: int) -> None:
        self._staged.append(("delete", table, entity_id, None))

    async def commit(self) -> int:
        try:
            affected = self.store.apply(self._staged)
        except InMemoryIntegrityError as e:
            logger.error(f"Commit failed: {e}")
            await self.rollback()
            raise
        self._staged.clear()
        self.committed = True
        logger.info(f"Transaction committed ({affected} row(s))")
        return affected

    async def rollback(self) -> None:
        if self._staged:
            logger.warning(f"Transaction rolled back ({len(self._staged)} staged write(s) discarded)")
        self._staged.clear()
