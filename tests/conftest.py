import pytest
from pico_ioc import DictSource, component, configuration, init

from pico_sqlpage import DatabaseConfigurer, DatabaseSettings, QueryTemplate, SessionManager

DEPARTMENTS = ["eng", "ops", "eng"]


@component
class EmployeeTableConfigurer(DatabaseConfigurer):
    priority = 10

    def configure(self, engine) -> None:
        with engine.begin() as conn:
            conn.exec_driver_sql(
                "CREATE TABLE employees ("
                "id INTEGER PRIMARY KEY, "
                "first_name VARCHAR(50), "
                "dept_code VARCHAR(10), "
                "note VARCHAR(50))"
            )


@component
class EmployeeDataConfigurer(DatabaseConfigurer):
    priority = 20

    def configure(self, engine) -> None:
        with engine.begin() as conn:
            for i in range(1, 46):
                conn.exec_driver_sql(
                    "INSERT INTO employees (id, first_name, dept_code, note) VALUES (?, ?, ?, ?)",
                    (i, f" emp{i:02d} ", DEPARTMENTS[i % 3], None),
                )


@pytest.fixture
def make_container(tmp_path):
    """Boots containers over one SQLite file, shutting them all down afterwards."""
    created = []

    def make(*modules, **database):
        tree = {"url": f"sqlite:///{tmp_path}/pages.db", "dialect": "mysql", **database}
        c = init(
            modules=["pico_sqlpage", __name__, *modules],
            config=configuration(DictSource({"database": tree})),
        )
        created.append(c)
        return c

    try:
        yield make
    finally:
        for c in created:
            c.cleanup_all()


@pytest.fixture
def container(make_container):
    return make_container()


@pytest.fixture
def settings(container):
    return container.get(DatabaseSettings)


@pytest.fixture
def session_manager(container):
    return container.get(SessionManager)


@pytest.fixture
def template(container):
    return container.get(QueryTemplate)
