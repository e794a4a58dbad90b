from abc import ABC
from typing import TypeVar, Generic, Optional, List, Any, Type, Sequence
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite
from pydantic import BaseModel

T = TypeVar("T")
SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseRepository(Generic[T, SchemaType], ABC):
    """모든 리포지토리의 베이스 클래스 - Pydantic 응답 보장

    리포지토리는 커밋하지 않는다. 트랜잭션 경계(커밋/롤백)는 서비스 계층의
    session_scope가 소유한다.
    """

    def __init__(
        self, model_class: Type[T], schema_class: Type[SchemaType], db: Session
    ):
        self.model_class = model_class
        self.schema_class = schema_class
        self.db = db

    def _to_schema(self, model_instance: Any) -> Optional[SchemaType]:
        """SQLAlchemy 모델을 Pydantic 스키마로 변환"""
        if model_instance is None:
            return None
        return self.schema_class.model_validate(model_instance)

    def _to_schema_list(self, model_instances: Sequence[Any]) -> List[SchemaType]:
        return [
            schema
            for schema in (self._to_schema(instance) for instance in model_instances)
            if schema is not None
        ]

    def create(self, **kwargs) -> Optional[SchemaType]:
        """새 레코드 추가 (flush만 수행)"""
        instance = self.model_class(**kwargs)
        self.db.add(instance)
        self.db.flush()
        self.db.refresh(instance)
        return self._to_schema(instance)

    def _upsert(self, values: dict, index_elements: List[str], update_fields: List[str]):
        """INSERT ... ON CONFLICT DO UPDATE (PostgreSQL / SQLite)"""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise NotImplementedError(f"Upsert is not supported for dialect: {dialect}")

        stmt = insert(self.model_class.__table__).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=index_elements,
            set_={field: getattr(stmt.excluded, field) for field in update_fields},
        )
        self.db.execute(stmt)
