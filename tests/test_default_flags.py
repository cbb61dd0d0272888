"""
Test that each owner scope keeps at most one default prompt and one default resume
"""

from covercraft.crud import crud_prompt, crud_resume
from covercraft.crud.defaults import count_defaults
from covercraft.models.prompt import PromptTemplate
from covercraft.models.resume import Resume


def _resume(db, owner_id, name, is_default=False):
    return crud_resume.create_resume(
        db,
        owner_id=owner_id,
        storage_path=f"resumes/{owner_id}/{name}",
        resume_text="text",
        filename=name,
        is_default=is_default,
    )


def test_creating_default_prompt_clears_previous_default(db):
    first = crud_prompt.create_prompt(db, "user-1", "First", "Body 1", is_default=True)
    second = crud_prompt.create_prompt(db, "user-1", "Second", "Body 2", is_default=True)

    db.refresh(first)
    assert first.is_default is False
    assert second.is_default is True
    assert count_defaults(db, PromptTemplate, "user-1") == 1


def test_updating_prompt_to_default_keeps_single_default(db):
    first = crud_prompt.create_prompt(db, "user-1", "First", "Body 1", is_default=True)
    second = crud_prompt.create_prompt(db, "user-1", "Second", "Body 2")

    crud_prompt.update_prompt(db, "user-1", second.id, {"is_default": True})

    defaults = crud_prompt.get_default_prompts(db, "user-1")
    assert [p.id for p in defaults] == [second.id]
    db.refresh(first)
    assert first.is_default is False


def test_default_scopes_are_independent(db):
    """Setting a user default never touches other users or the global scope"""
    global_default = crud_prompt.create_prompt(db, None, "Global", "Global body", is_default=True)
    other = crud_prompt.create_prompt(db, "user-2", "Other", "Other body", is_default=True)
    crud_prompt.create_prompt(db, "user-1", "Mine", "My body", is_default=True)

    assert count_defaults(db, PromptTemplate, None) == 1
    assert count_defaults(db, PromptTemplate, "user-2") == 1
    assert count_defaults(db, PromptTemplate, "user-1") == 1
    db.refresh(global_default)
    db.refresh(other)
    assert global_default.is_default is True
    assert other.is_default is True


def test_unsetting_default_leaves_zero_defaults(db):
    prompt = crud_prompt.create_prompt(db, "user-1", "Only", "Body", is_default=True)

    crud_prompt.update_prompt(db, "user-1", prompt.id, {"is_default": False})

    assert count_defaults(db, PromptTemplate, "user-1") == 0


def test_resume_defaults_follow_same_rule(db):
    first = _resume(db, "user-1", "a.pdf", is_default=True)
    second = _resume(db, "user-1", "b.pdf", is_default=True)
    third = _resume(db, "user-1", "c.pdf")

    assert count_defaults(db, Resume, "user-1") == 1

    crud_resume.update_resume(db, "user-1", third.id, is_default=True)

    db.refresh(first)
    db.refresh(second)
    db.refresh(third)
    assert (first.is_default, second.is_default, third.is_default) == (False, False, True)


def test_resumes_list_default_first(db):
    _resume(db, "user-1", "a.pdf")
    default = _resume(db, "user-1", "b.pdf", is_default=True)
    _resume(db, "user-1", "c.pdf")
    _resume(db, "user-2", "d.pdf")

    resumes, total = crud_resume.get_resumes(db, "user-1")

    assert total == 3
    assert resumes[0].id == default.id
