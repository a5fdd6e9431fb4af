"""
Tests for rule-based refinement.
"""

import pytest

from prompt_engine.domains import Domain, Template, Tone
from prompt_engine.models import RawPrompt
from prompt_engine.refiner import EMPTY_TASK, ENHANCEMENT_ORDER, Enhancement, PromptRefiner
from prompt_engine.rules import RuleTables

LOGIN_FORM_REFINED = (
    "Role: You are an experienced professional assistant.\n\n"
    "Task: Create a login form.\n\n"
    "Output: Deliver the complete result as structured markdown with clear headings."
)


def section(text: str, label: str) -> str:
    """Body of the first section with this label."""
    for block in text.split("\n\n"):
        if block.startswith(f"{label}:"):
            return block[len(label) + 1:].strip()
    raise AssertionError(f"no {label} section in:\n{text}")


class TestPromptRefiner:
    """Tests for PromptRefiner.refine."""

    def setup_method(self):
        self.refiner = PromptRefiner(RuleTables.default())

    def test_login_form_baseline(self):
        refined = self.refiner.refine(RawPrompt("create a login form"), Domain.GENERAL, Template.BASIC)

        assert refined == LOGIN_FORM_REFINED
        assert len(refined) == 161

    def test_accepts_plain_string(self):
        assert self.refiner.refine("create a login form", Domain.GENERAL, Template.BASIC) == LOGIN_FORM_REFINED

    def test_sql_query(self):
        refined = self.refiner.refine("make a sql query to get users", Domain.SQL, Template.CHAIN_OF_THOUGHT)

        assert section(refined, "Task") == "Write a SQL query to get users."
        assert "- Consider query performance with a proper indexing strategy" in section(refined, "Requirements")
        for title in ("Dialect", "Schema assumptions", "Performance constraints"):
            assert f"\n\n{title}: " in refined
        assert "Reasoning steps:\n1. " in refined
        assert refined.startswith("Role: You are a senior database engineer")

    def test_section_order(self):
        refined = self.refiner.refine(
            "make a sql query to get users",
            Domain.SQL,
            Template.CHAIN_OF_THOUGHT,
            enhancements=ENHANCEMENT_ORDER,
        )
        labels = [block.split(":", 1)[0] for block in refined.split("\n\n")]

        assert labels == [
            "Role", "Task", "Requirements", "Dialect", "Schema assumptions",
            "Performance constraints", "Constraints", "Success criteria",
            "Reasoning steps", "Output",
        ]

    def test_role_based_adds_persona_first(self):
        refined = self.refiner.refine("design a logo for a coffee brand", Domain.BRANDING, Template.ROLE_BASED)

        assert refined.startswith("Persona: Adopt the perspective of ")
        assert "\n\nRole: " in refined

    def test_few_shot_adds_examples(self):
        refined = self.refiner.refine("plan a sprint review", Domain.GENERAL, Template.FEW_SHOT)

        assert "Examples:\n1. Input: plan a team offsite\n   Output: Create a 2-day offsite agenda" in refined

    def test_polite_request_becomes_imperative(self):
        refined = self.refiner.refine("please can you explain recursion?", Domain.GENERAL, Template.BASIC)

        assert section(refined, "Task") == "Explain recursion."

    def test_question_is_kept_as_question(self):
        refined = self.refiner.refine("what is a monad?", Domain.GENERAL, Template.BASIC)

        assert section(refined, "Task") == "Answer the following question: What is a monad?"

    def test_role_sentence_becomes_role(self):
        refined = self.refiner.refine(
            "You are a data analyst. Summarize the quarterly sales report.",
            Domain.GENERAL,
            Template.BASIC,
        )

        assert section(refined, "Role") == "You are a data analyst."
        assert section(refined, "Task") == "Summarize the quarterly sales report."

    def test_as_role_prefix_is_split_from_task(self):
        refined = self.refiner.refine(
            "As a data analyst, summarize the quarterly sales",
            Domain.GENERAL,
            Template.BASIC,
        )

        assert section(refined, "Role") == "Act as a data analyst."
        assert section(refined, "Task") == "Summarize the quarterly sales."

    def test_with_clause_becomes_requirements(self):
        refined = self.refiner.refine(
            "build a landing page with a hero section, pricing table and signup form",
            Domain.GENERAL,
            Template.BASIC,
        )

        assert section(refined, "Task") == "Build a landing page."
        assert section(refined, "Requirements") == "- A hero section\n- Pricing table\n- Signup form"

    def test_single_with_clause_stays_in_task(self):
        refined = self.refiner.refine("write a report with charts", Domain.GENERAL, Template.BASIC)

        assert section(refined, "Task") == "Write a report with charts."

    def test_requirement_sentences_and_context(self):
        refined = self.refiner.refine(
            "Write a release note. The release ships on Friday. It must mention the new export button.",
            Domain.GENERAL,
            Template.BASIC,
        )

        assert section(refined, "Context") == "The release ships on Friday."
        assert section(refined, "Requirements") == "- It must mention the new export button"

    def test_missing_verb_gets_domain_verb(self):
        refined = self.refiner.refine("a dashboard for billing", Domain.SAAS, Template.BASIC)

        assert section(refined, "Task") == "Design a dashboard for billing."

    def test_vague_terms_replaced(self):
        refined = self.refiner.refine("write a nice summary", Domain.GENERAL, Template.BASIC)

        assert section(refined, "Task") == "Write a well-crafted summary."

    def test_canonical_casing(self):
        refined = self.refiner.refine("document the json api", Domain.GENERAL, Template.BASIC)

        assert section(refined, "Task") == "Document the JSON API."

    def test_empty_input_asks_for_details(self):
        refined = self.refiner.refine("", Domain.GENERAL, Template.BASIC)

        assert section(refined, "Task") == EMPTY_TASK
        assert refined.endswith("with clear headings.")

    def test_tone_is_appended_to_output(self):
        refined = self.refiner.refine(
            RawPrompt("create a login form", tone=Tone.TECHNICAL),
            Domain.GENERAL,
            Template.BASIC,
        )

        assert refined.endswith("Use a technical tone.")

    def test_constraints_enhancement(self):
        refined = self.refiner.refine("create a login form", Domain.GENERAL, Template.BASIC, [Enhancement.CONSTRAINTS])

        assert "Constraints:\n- Keep the answer under 500 words" in refined
        assert "Success criteria:" not in refined

    def test_success_and_default_requirements(self):
        refined = self.refiner.refine(
            "create a login form",
            Domain.GENERAL,
            Template.BASIC,
            [Enhancement.SUCCESS_CRITERIA, Enhancement.DEFAULT_REQUIREMENTS],
        )

        assert "Success criteria:\n- Every requirement in the task is addressed" in refined
        assert "Requirements:\n- Cover the full scope of the task" in refined

    def test_explicit_references(self):
        baseline = self.refiner.refine("fix it", Domain.GENERAL, Template.BASIC)
        explicit = self.refiner.refine("fix it", Domain.GENERAL, Template.BASIC, [Enhancement.EXPLICIT_REFERENCES])

        assert section(baseline, "Task") == "Fix it."
        assert section(explicit, "Task") == "Fix the deliverable."

    def test_deterministic(self):
        outputs = {
            self.refiner.refine("make a sql query to get users", Domain.SQL, Template.CHAIN_OF_THOUGHT)
            for _ in range(5)
        }
        assert len(outputs) == 1

    @pytest.mark.parametrize("domain", list(Domain))
    @pytest.mark.parametrize("template", list(Template))
    def test_every_domain_and_template(self, domain, template):
        refined = self.refiner.refine("create a report for the team", domain, template)

        assert "Task: Create a report for the team." in refined
        assert "\n\nOutput: " in refined

    def test_domain_replacement_runs_before_generic(self):
        refined = self.refiner.refine("make a bonita tabla", Domain.SQL, Template.BASIC)

        assert section(refined, "Task") == "Write a well-structured, normalized database table."


class TestSystemPrompt:

    def setup_method(self):
        self.refiner = PromptRefiner(RuleTables.default())

    def test_general(self):
        assert self.refiner.system_prompt(Domain.GENERAL) == (
            "You are an experienced professional assistant.\n\n"
            "Focus: General purpose prompt optimization with universal improvements.\n\n"
            "Constraints:\n"
            "- Keep the answer under 500 words unless the task requires more\n"
            "- Use only facts stated in the task or explicitly marked as assumptions\n\n"
            "Output: Deliver the complete result as structured markdown with clear headings."
        )

    def test_tone_extends_output_line(self):
        prompt = self.refiner.system_prompt(Domain.GENERAL, Tone.FORMAL)

        assert prompt.endswith("clear headings. Use a formal tone.")

    def test_uses_domain_persona(self):
        prompt = self.refiner.system_prompt(Domain.SQL)

        assert prompt.startswith("You are a senior database engineer who writes correct, index-aware SQL.\n\n")
        assert "Focus: SQL queries, schema design and database performance." in prompt

    def test_same_for_every_prompt_of_a_domain(self):
        assert self.refiner.system_prompt(Domain.SAAS) == self.refiner.system_prompt(Domain.SAAS)
        assert self.refiner.system_prompt(Domain.SAAS) != self.refiner.system_prompt(Domain.SQL)
