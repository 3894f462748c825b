# apps/api/app/db/upsert.py
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite


def upsert(db: Session, model, values: dict, key: list[str]) -> None:
    """
    Single-statement INSERT ... ON CONFLICT (key) DO UPDATE.
    Every non-key column in `values` is overwritten on conflict.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        insert = postgresql.insert
    elif dialect == "sqlite":
        insert = sqlite.insert
    else:
        raise NotImplementedError(f"upsert not supported for dialect {dialect!r}")

    stmt = insert(model.__table__).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=key,
        set_={c: stmt.excluded[c] for c in values if c not in key},
    )
    db.execute(stmt)
