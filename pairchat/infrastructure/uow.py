# pairchat/infrastructure/uow.py

from typing import Any, Dict, Type


class UoWModel:
    """Proxy around an ORM row; attribute writes mark the row dirty."""

    def __init__(self, model: Any, uow: "UnitOfWork"):
        self.__dict__["_model"] = model
        self.__dict__["_uow"] = uow

    def __getattr__(self, key):
        return getattr(self._model, key)

    def __setattr__(self, key, value):
        setattr(self._model, key, value)
        self._uow.register_dirty(self._model)


class UnitOfWork:
    def __init__(self) -> None:
        self.new: Dict[int, Any] = {}
        self.dirty: Dict[int, Any] = {}
        self.deleted: Dict[int, Any] = {}
        self.mappers: Dict[Type, Any] = {}

    @staticmethod
    def _unwrap(model: Any) -> Any:
        return model._model if isinstance(model, UoWModel) else model

    def register_new(self, model: Any) -> UoWModel:
        model = self._unwrap(model)
        self.new[id(model)] = model
        return UoWModel(model, self)

    def register_dirty(self, model: Any) -> None:
        model = self._unwrap(model)
        # pending inserts already carry their latest state
        if id(model) not in self.new:
            self.dirty[id(model)] = model

    def register_deleted(self, model: Any) -> None:
        model = self._unwrap(model)
        self.dirty.pop(id(model), None)
        if self.new.pop(id(model), None) is None:
            self.deleted[id(model)] = model

    def _mapper(self, model: Any):
        try:
            return self.mappers[type(model)]
        except KeyError:
            raise LookupError(f"No data mapper registered for {type(model).__name__}")

    async def commit(self) -> None:
        try:
            for model in self.new.values():
                await self._mapper(model).insert(model)
            for model in self.dirty.values():
                await self._mapper(model).update(model)
            for model in self.deleted.values():
                await self._mapper(model).delete(model)
        finally:
            self.new.clear()
            self.dirty.clear()
            self.deleted.clear()
