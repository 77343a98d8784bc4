"""Functional tests for entity serialization and value semantics."""

from __future__ import annotations

import json
import uuid
from datetime import date, datetime, timezone

from conftest import communication_question, make_question, make_task

from casesync.models import (
    Answer,
    AnswerOption,
    AnswerTrigger,
    AppData,
    Category,
    ClassificationDetailsValue,
    Communication,
    Contact,
    ContactDetailsFullValue,
    ContactDetailsValue,
    DateValue,
    LastExposureDateValue,
    MultipleChoiceValue,
    OpenValue,
    Question,
    QuestionnaireResult,
    Questionnaire,
    QuestionType,
    Task,
    TaskType,
    empty_value_for,
)

WHEN = datetime(2020, 10, 2, 8, 30, tzinfo=timezone.utc)


def _every_value_variant() -> list:
    return [
        ClassificationDetailsValue(category1_risk=True, category2a_risk=False, category2b_risk=None, category3_risk=None),
        ContactDetailsValue(first_name="Alex", last_name="Jansen", email="alex@example.org", phone_number="0612345678"),
        ContactDetailsFullValue(first_name="Sam", last_name=None, email=None, phone_number="0201234567"),
        DateValue(value=date(2020, 9, 28)),
        OpenValue(value="met at work"),
        MultipleChoiceValue(value=AnswerOption(label="I will", value="index", trigger=AnswerTrigger.SET_COMMUNICATION_TO_INDEX)),
        LastExposureDateValue(value=date(2020, 9, 29)),
    ]


def _app_data_with_every_variant() -> AppData:
    questions = [make_question(QuestionType.OPEN), communication_question()]
    questionnaire = Questionnaire(uuid=uuid.uuid4(), task_type=TaskType.CONTACT, questions=tuple(questions))
    answers = [Answer(question_uuid=uuid.uuid4(), last_modified=WHEN, value=v) for v in _every_value_variant()]
    task = Task(
        label="Alex",
        task_context="Colleague",
        contact=Contact(
            category=Category.CATEGORY_2B,
            communication=Communication.INDEX,
            did_inform=True,
            date_of_last_exposure=date(2020, 9, 29),
        ),
        result=QuestionnaireResult(questionnaire_uuid=questionnaire.uuid, answers=answers),
    )
    return AppData(tasks=[task, make_task()], questionnaires=[questionnaire], date_of_symptom_onset=date(2020, 10, 1))


def test_app_data_round_trips_through_json():
    data = _app_data_with_every_variant()

    decoded = AppData.model_validate_json(data.model_dump_json(by_alias=True))

    assert decoded == data


def test_empty_app_data_round_trips():
    data = AppData.empty()
    assert AppData.model_validate_json(data.model_dump_json(by_alias=True)) == data


def test_wire_shape_uses_camel_case_and_explicit_nulls():
    wire = _app_data_with_every_variant().to_wire()

    assert wire["dateOfSymptomOnset"] == "2020-10-01"
    task = wire["tasks"][1]
    assert task["taskType"] == "contact"
    assert task["result"] is None
    assert task["contact"] == {
        "category": "2a",
        "communication": "none",
        "didInform": False,
        "dateOfLastExposure": None,
    }
    answer = wire["tasks"][0]["result"]["answers"][0]
    assert set(answer) == {"uuid", "questionUuid", "lastModified", "value"}
    assert answer["value"] == {
        "type": "classificationDetails",
        "category1Risk": True,
        "category2aRisk": False,
        "category2bRisk": None,
        "category3Risk": None,
    }


def test_relevant_categories_are_encoded_as_tagged_wrappers():
    q = make_question(categories=(Category.CATEGORY_1, Category.CATEGORY_3))

    wire = q.to_wire()

    assert wire["relevantForCategories"] == [{"category": "1"}, {"category": "3"}]
    assert Question.model_validate(wire) == q


def test_question_decodes_backend_payload():
    payload = json.loads(
        """
        {
          "uuid": "7d2c1e0c-6b6b-4a5e-9d0f-3f0f5b3f9d11",
          "group": "contactdetails",
          "questionType": "multiplechoice",
          "label": "Who informs the contact?",
          "description": null,
          "relevantForCategories": [{"category": "2a"}, {"category": "2b"}],
          "answerOptions": [
            {"label": "I will", "value": "index", "trigger": "communication_index"},
            {"label": "Staff", "value": "staff", "trigger": null}
          ]
        }
        """
    )

    q = Question.model_validate(payload)

    assert q.question_type is QuestionType.MULTIPLE_CHOICE
    assert q.relevant_for_categories == (Category.CATEGORY_2A, Category.CATEGORY_2B)
    assert q.is_relevant_for(Category.CATEGORY_2B)
    assert not q.is_relevant_for(Category.CATEGORY_1)
    assert q.has_communication_trigger


def test_unreadable_answer_options_are_treated_as_absent():
    payload = {
        "uuid": str(uuid.uuid4()),
        "group": "other",
        "questionType": "open",
        "label": None,
        "description": None,
        "relevantForCategories": [{"category": "3"}],
        "answerOptions": [{"label": "missing value"}],
    }

    q = Question.model_validate(payload)

    assert q.answer_options is None


def test_value_equality_ignores_answer_metadata():
    a = Answer(question_uuid=uuid.uuid4(), last_modified=WHEN, value=OpenValue(value="x"))
    b = Answer(question_uuid=uuid.uuid4(), value=OpenValue(value="x"))

    assert a.value == b.value
    assert OpenValue(value="x") != OpenValue(value="y")
    assert DateValue(value=date(2020, 1, 1)) != LastExposureDateValue(value=date(2020, 1, 1))
    assert ContactDetailsValue(first_name="A") != ContactDetailsFullValue(first_name="A")


def test_empty_values_exist_for_every_question_type():
    for question_type in QuestionType:
        value = empty_value_for(question_type)
        payload = value.model_dump(exclude={"type"})
        assert payload and all(v is None for v in payload.values())


def test_trigger_maps_to_communication():
    assert AnswerTrigger.SET_COMMUNICATION_TO_INDEX.communication is Communication.INDEX
    assert AnswerTrigger.SET_COMMUNICATION_TO_STAFF.communication is Communication.STAFF


def test_category_rank_follows_risk_order():
    ranks = [c.rank for c in (Category.CATEGORY_1, Category.CATEGORY_2A, Category.CATEGORY_2B, Category.CATEGORY_3)]
    assert ranks == [0, 1, 2, 3]


def test_contact_name_prefers_contact_details_answer():
    task = make_task(label="Fallback")
    assert task.contact_name == "Fallback"
    assert task.contact_first_name == "Fallback"

    task.result = QuestionnaireResult(
        questionnaire_uuid=uuid.uuid4(),
        answers=[
            Answer(question_uuid=uuid.uuid4(), value=OpenValue(value="note")),
            Answer(question_uuid=uuid.uuid4(), value=ContactDetailsValue(first_name="Alex", last_name="Jansen")),
        ],
    )
    assert task.contact_name == "Alex Jansen"
    assert task.contact_first_name == "Alex"


def test_contact_first_name_falls_back_to_label_without_first_name():
    task = make_task(label="Alex")
    task.result = QuestionnaireResult(
        questionnaire_uuid=uuid.uuid4(),
        answers=[Answer(question_uuid=uuid.uuid4(), value=ContactDetailsValue(last_name="Jansen"))],
    )

    assert task.contact_first_name == "Alex"
    assert task.contact_name == "Jansen"


def test_is_or_can_be_informed():
    task = make_task()
    assert not task.is_or_can_be_informed
    task.contact.communication = Communication.STAFF
    assert task.is_or_can_be_informed
    task.contact = Contact(category=Category.CATEGORY_1, did_inform=True)
    assert task.is_or_can_be_informed
