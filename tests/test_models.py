"""
Entity mapping between JSON, pydantic models and table rows
"""

from datetime import date

from timesheet_rest.models.employee import Employee
from timesheet_rest.models.project import Project
from timesheet_rest.models.timesheet import Timesheet


class TestTimesheetModel:

    def test_json_uses_camel_case(self):
        timesheet = Timesheet(id=1, project_id=2, employee_id=3, minutes=4, created_at=date(2024, 6, 30))

        assert timesheet.model_dump(mode="json", by_alias=True) == {
            "id": 1,
            "projectId": 2,
            "employeeId": 3,
            "minutes": 4,
            "createdAt": "2024-06-30",
        }

    def test_accepts_alias_and_field_names(self):
        by_alias = Timesheet.model_validate({"projectId": 9, "createdAt": "2024-01-02"})
        by_name = Timesheet.model_validate({"project_id": 9, "created_at": "2024-01-02"})

        assert by_alias == by_name
        assert by_alias.created_at == date(2024, 1, 2)

    def test_all_fields_optional(self):
        timesheet = Timesheet()

        assert timesheet.id is None
        assert timesheet.to_record() == {
            "project_id": None,
            "employee_id": None,
            "minutes": None,
            "created_at": None,
        }

    def test_record_mapping(self):
        row = {"id": 5, "project_id": 999, "employee_id": 998, "minutes": 60, "created_at": date(2024, 2, 29)}

        timesheet = Timesheet.from_record(row)

        assert timesheet.id == 5
        assert timesheet.to_record() == {key: value for key, value in row.items() if key != "id"}


class TestNamedEntities:

    def test_project_record_mapping(self):
        project = Project.from_record({"id": 1, "name": "Test Project"})

        assert project == Project(id=1, name="Test Project")
        assert project.to_record() == {"name": "Test Project"}

    def test_employee_record_mapping(self):
        employee = Employee.from_record({"id": 2, "name": "Test Employee"})

        assert employee == Employee(id=2, name="Test Employee")
        assert employee.to_record() == {"name": "Test Employee"}
