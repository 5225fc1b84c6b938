#!/usr/bin/env python3
"""
Section building for result exports.

Turns a source document into a SectionModel for one role and language. Role
gating happens here and only here: renderers draw whatever sections they are
given.

Contains: ElectionSectionBuilder, SurveySectionBuilder, build_section_model.

Usage:
    from section_builder import build_section_model
    from export_types import Role, Language

    model = build_section_model(document, Role.CREATOR, Language.EN)
    for section in model.sections:
        print(section.title, section.column_count, len(section.rows))
"""

import logging
from typing import Optional

from document_analyzer import DocumentAnalyzer, as_double, as_int, as_text
from export_types import (
    Language,
    QuestionType,
    ReportVariant,
    Role,
    Section,
    SectionModel,
    distribution_percentages,
    format_percentage,
)
from label_catalog import LabelCatalog, survey_main_fields

logger = logging.getLogger(__name__)


class ElectionSectionBuilder:
    """
    Builds the election report.

    Sections, in order:
        Main Data (all roles)
        Gender Distribution, Age Range Distribution (creator only, omitted when empty)
        Results Summary (all roles)
        Insights (creator only, omitted when the source has no insights node)
    """

    variant = ReportVariant.ELECTION

    # (section key, analytics key)
    DISTRIBUTIONS = (
        ("GENDER_DIST", "candidateGender"),
        ("AGE_DIST", "candidateAgeRange"),
    )

    INSIGHT_FIELDS = ("totalCandidates", "allVotersCount", "completionRate", "submittedVotesCount")

    def __init__(self, analyzer: DocumentAnalyzer, role: Role, language: Language):
        self.analyzer = analyzer
        self.role = role
        self.language = language
        self.labels = LabelCatalog(self.variant, language)

    def build(self) -> SectionModel:
        model = SectionModel(sheet_name=self.labels("MAIN_DATA"))
        model.add(self.main_data())
        if self.role.is_creator:
            for section_key, analytics_key in self.DISTRIBUTIONS:
                model.add(self.distribution(section_key, analytics_key))
        model.add(self.results_summary())
        if self.role.is_creator:
            model.add(self.insights())
        return model

    def export_type_label(self) -> str:
        return self.labels("creator" if self.role.is_creator else "voter")

    def main_data(self) -> Section:
        columns = self.analyzer.main_data_columns()
        section = Section(
            key="MAIN_DATA",
            title=self.labels("MAIN_DATA"),
            header=self.labels.many(columns),
            merge_title_columns=len(columns),
        )
        values = []
        for column in columns:
            if column == "exportType":
                values.append(self.export_type_label())
            else:
                values.append(self.analyzer.field_text(column, missing="N/A"))
        section.add_row(values)
        return section

    def distribution(self, section_key: str, analytics_key: str) -> Optional[Section]:
        counts = self.analyzer.distribution(analytics_key)
        if not counts:
            logger.debug(f"No {analytics_key} distribution in source, skipping {section_key}")
            return None

        section = Section(
            key=section_key,
            title=self.labels(section_key),
            header=self.labels.many(["category", "percentage"]),
            merge_title_columns=2,
        )
        for category, percent in distribution_percentages(counts):
            section.add_row([category, format_percentage(percent)])
        return section

    def results_summary(self) -> Section:
        columns = ["candidateName", "numberOfVoters"]
        if self.role.is_creator:
            columns.append("voters")

        section = Section(
            key="RESULTS_SUMMARY",
            title=self.labels("RESULTS_SUMMARY"),
            header=self.labels.many(columns),
            merge_title_columns=len(columns),
        )
        for candidate in self.analyzer.list_field("resultsSummary") or []:
            if not isinstance(candidate, dict):
                candidate = {}
            row = [
                as_text(candidate.get("candidateName"), "N/A"),
                str(as_int(candidate.get("numberOfVoters"))),
            ]
            if self.role.is_creator:
                row.append(self.voters_text(candidate.get("voters")))
            section.add_row(row)
        return section

    def voters_text(self, voters) -> str:
        """Comma-joined voter names, or the localized placeholder."""
        if not isinstance(voters, list) or not voters:
            return self.labels("notAvailable")
        return ", ".join(as_text(voter) for voter in voters)

    def insights(self) -> Optional[Section]:
        if not self.analyzer.has("insights"):
            return None

        insights = self.analyzer.get("insights")
        if not isinstance(insights, dict):
            insights = {}

        section = Section(
            key="INSIGHTS",
            title=self.labels("INSIGHTS"),
            header=self.labels.many(self.INSIGHT_FIELDS),
            merge_title_columns=len(self.INSIGHT_FIELDS),
        )
        section.add_row([
            str(as_int(insights.get("totalCandidates"))),
            str(as_int(insights.get("allVotersCount"))),
            format_percentage(as_double(insights.get("completionRate"))),
            str(as_int(insights.get("submittedVotesCount"))),
        ])
        return section


class SurveySectionBuilder:
    """
    Builds the survey report.

    Sections, in order:
        Main Data (creator only): one header row of field labels, one value row
        Question Results (all roles): untitled, rows expanded per question type
    """

    variant = ReportVariant.SURVEY

    # Skipped entirely when absent from the source
    OMIT_WHEN_ABSENT = ("endDate", "endTime")

    def __init__(self, analyzer: DocumentAnalyzer, role: Role, language: Language):
        self.analyzer = analyzer
        self.role = role
        self.language = language
        self.labels = LabelCatalog(self.variant, language)

    @property
    def include_voter_name(self) -> bool:
        return self.role.is_creator

    def build(self) -> SectionModel:
        sheet_key = "CREATOR_SHEET" if self.role.is_creator else "VIEWER_SHEET"
        model = SectionModel(sheet_name=self.labels(sheet_key))
        if self.role.is_creator:
            model.add(self.main_data())
        model.add(self.question_results())
        return model

    def main_data(self) -> Section:
        keys = [
            key for key in survey_main_fields(self.language)
            if key not in self.OMIT_WHEN_ABSENT or self.analyzer.has(key)
        ]
        section = Section(
            key="MAIN_DATA",
            title=self.labels("MAIN_DATA"),
            header=self.labels.many(keys),
        )
        section.add_row([self.analyzer.field_text(key) for key in keys])
        return section

    def question_header(self) -> list[str]:
        keys = ["questionNumber", "title", "questionType", "answerName", "answerPercentage"]
        if self.include_voter_name:
            keys.append("voterName")
        return self.labels.many(keys)

    def question_results(self) -> Section:
        section = Section(key="QUESTION_RESULTS", title=None, header=self.question_header())
        questions = self.analyzer.list_field("questionResults")
        if questions is None:
            logger.debug("Source has no questionResults array")
            return section

        for question in questions:
            if not isinstance(question, dict):
                question = {}
            for row in self.question_rows(question):
                section.add_row(row)
        return section

    def question_rows(self, question: dict) -> list[list[str]]:
        """Rows for one question, chosen by its type tag."""
        prefix = [
            as_text(question.get("questionNumber")),
            as_text(question.get("title")),
            as_text(question.get("type")),
        ]
        question_type = QuestionType.from_tag(prefix[2])

        if question_type.is_text_type:
            row = prefix + [as_text(question.get("singleAnswer")), ""]
            if self.include_voter_name:
                row.append(as_text(question.get("voterName")))
            return [row]

        if question_type.is_multi_answer_type:
            answers = question.get("answers")
            if not isinstance(answers, list) or not answers:
                row = prefix + ["", ""]
                if self.include_voter_name:
                    row.append("")
                return [row]

            rows = []
            for answer in answers:
                if not isinstance(answer, dict):
                    answer = {}
                percentage = as_double(answer.get("answerPercentage"))
                row = prefix + [as_text(answer.get("name")), f"{percentage!r}%"]
                if self.include_voter_name:
                    row.append(as_text(answer.get("voterName")))
                rows.append(row)
            return rows

        row = prefix + [self.labels("unknownQuestionType"), ""]
        if self.include_voter_name:
            row.append("")
        return [row]


BUILDERS = {
    ReportVariant.ELECTION: ElectionSectionBuilder,
    ReportVariant.SURVEY: SurveySectionBuilder,
}


def build_section_model(
    document: dict,
    role: Role,
    language: Language,
    variant: Optional[ReportVariant] = None,
) -> SectionModel:
    """
    Build the section model for a document.

    Args:
        document: Source document (top-level dict with a `data` node)
        role: Requester role
        language: Output language
        variant: Report variant; detected from the document when None

    Returns:
        SectionModel ready for rendering
    """
    analyzer = DocumentAnalyzer(document)
    if variant is None:
        variant = analyzer.detect_variant()
    builder = BUILDERS[variant](analyzer, role, language)
    model = builder.build()
    logger.debug(
        f"Built {variant.value} model for {role.value}/{language.value}: "
        f"{len(model.sections)} sections"
    )
    return model
