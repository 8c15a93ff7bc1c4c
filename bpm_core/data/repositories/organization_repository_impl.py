"""SQLAlchemy implementations of the organization lookups."""

from bpm_core.domain.repositories import DepartmentRepository, RoleRepository, UserRepository

from ..mappers import DepartmentMapper, RoleMapper, UserMapper
from ..models import DepartmentModel, RoleModel, UserModel
from .base import SqlAlchemyRepository


class SqlAlchemyDepartmentRepository(SqlAlchemyRepository, DepartmentRepository):
    model = DepartmentModel
    mapper = DepartmentMapper


class SqlAlchemyRoleRepository(SqlAlchemyRepository, RoleRepository):
    model = RoleModel
    mapper = RoleMapper


class SqlAlchemyUserRepository(SqlAlchemyRepository, UserRepository):
    model = UserModel
    mapper = UserMapper
