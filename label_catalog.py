#!/usr/bin/env python3
"""
Display labels for exported reports, per report variant and language.

The election and survey reports use separate tables: their key sets differ
and are not interchangeable.

Usage:
    from label_catalog import resolve
    from export_types import Language, ReportVariant

    resolve(ReportVariant.ELECTION, Language.AR, "RESULTS_SUMMARY")  # "ملخص النتائج"
"""

from types import MappingProxyType

from export_types import Language, ReportVariant


def _frozen(tables: dict) -> MappingProxyType:
    return MappingProxyType({lang: MappingProxyType(labels) for lang, labels in tables.items()})


ELECTION_LABELS = _frozen({
    Language.EN: {
        # Section titles
        "MAIN_DATA": "Main Data",
        "GENDER_DIST": "Gender Distribution",
        "AGE_DIST": "Age Range Distribution",
        "RESULTS_SUMMARY": "Results Summary",
        "INSIGHTS": "Insights",
        # Field labels
        "electionId": "Election Id",
        "electionName": "Election Name",
        "electionDescription": "Election Description",
        "startDate": "Start Date",
        "endDate": "End Date",
        "exportType": "Export Type",
        "creator": "Creator",
        "voter": "Voter",
        "candidateName": "Candidate Name",
        "numberOfVoters": "Number Of Voters",
        "voters": "Voters",
        "percentage": "Percentage",
        "notAvailable": "Not Available",
        "totalCandidates": "Total Candidates",
        "allVotersCount": "All Voters Count",
        "completionRate": "Completion Rate",
        "submittedVotesCount": "Submitted Votes Count",
        "category": "Category",
    },
    Language.AR: {
        "MAIN_DATA": "البيانات الرئيسية",
        "GENDER_DIST": "توزيع الجنس",
        "AGE_DIST": "توزيع الفئات العمرية",
        "RESULTS_SUMMARY": "ملخص النتائج",
        "INSIGHTS": "رؤى",
        "electionId": "معرّف الانتخاب",
        "electionName": "اسم الانتخاب",
        "electionDescription": "وصف الانتخاب",
        "startDate": "تاريخ البدء",
        "endDate": "تاريخ الانتهاء",
        "exportType": "نوع التصدير",
        "creator": "منشئ",
        "voter": "مشاهد",
        "candidateName": "اسم المرشح",
        "numberOfVoters": "عدد المصوتين",
        "voters": "المصوتين",
        "percentage": "النسبة المئوية",
        "notAvailable": "غير متاح للمشاهد",
        "totalCandidates": "إجمالي المرشحين",
        "allVotersCount": "عدد المصوتين",
        "completionRate": "معدل الإكمال",
        "submittedVotesCount": "عدد الأصوات المقدمة",
        "category": "الفئة",
    },
})

# Main-data fields of a survey report, in column order
_SURVEY_FIELD_ORDER = (
    "voteTitle",
    "creator",
    "loggedInUser",
    "votingStatus",
    "type",
    "description",
    "allowShare",
    "startDate",
    "startTime",
    "endDate",
    "endTime",
    "totalParticipants",
    "submittedVotes",
    "pendingVotes",
    "views",
    "completionRate",
    "questionResultCount",
)

SURVEY_MAIN_FIELDS = MappingProxyType({
    Language.EN: _SURVEY_FIELD_ORDER,
    Language.AR: _SURVEY_FIELD_ORDER,
})

SURVEY_LABELS = _frozen({
    Language.EN: {
        "MAIN_DATA": "Main Data",
        "QUESTION_RESULTS": "Question Results",
        "CREATOR_SHEET": "Survey Data - Creator",
        "VIEWER_SHEET": "Survey Data - Viewer",
        "unknownQuestionType": "Unknown Question Type",
        "voteTitle": "Vote Title",
        "creator": "Creator",
        "loggedInUser": "Logged In User",
        "votingStatus": "Voting Status",
        "type": "Type",
        "description": "Description",
        "allowShare": "Allow Share",
        "startDate": "Start Date",
        "startTime": "Start Time",
        "endDate": "End Date",
        "endTime": "End Time",
        "totalParticipants": "Total Participants",
        "submittedVotes": "Submitted Votes",
        "pendingVotes": "Pending Votes",
        "views": "Views",
        "completionRate": "Completion Rate",
        "questionResultCount": "Question Result Count",
        # Question results header
        "questionNumber": "Question Number",
        "title": "Title",
        "questionType": "Type",
        "answerName": "Answer Name",
        "answerPercentage": "Answer Percentage",
        "voterName": "Voter Name",
    },
    Language.AR: {
        "MAIN_DATA": "البيانات الرئيسية",
        "QUESTION_RESULTS": "نتائج الأسئلة",
        "CREATOR_SHEET": "بيانات الاستبيان - منشئ",
        "VIEWER_SHEET": "بيانات الاستبيان - مشاهد",
        "unknownQuestionType": "نوع السؤال غير معروف",
        "voteTitle": "عنوان الاستطلاع",
        "creator": "المنشئ",
        "loggedInUser": "المستخدم المسجل",
        "votingStatus": "حالة التصويت",
        "type": "النوع",
        "description": "الوصف",
        "allowShare": "السماح بالمشاركة",
        "startDate": "تاريخ البدء",
        "startTime": "وقت البدء",
        "endDate": "تاريخ الانتهاء",
        "endTime": "وقت الانتهاء",
        "totalParticipants": "إجمالي المشاركين",
        "submittedVotes": "الأصوات المقدمة",
        "pendingVotes": "الأصوات المعلقة",
        "views": "عدد المشاهدات",
        "completionRate": "معدل الإكمال",
        "questionResultCount": "عدد نتائج الأسئلة",
        "questionNumber": "رقم السؤال",
        "title": "العنوان",
        "questionType": "النوع",
        "answerName": "اسم الإجابة",
        "answerPercentage": "نسبة الإجابة",
        "voterName": "اسم المصوت",
    },
})

CATALOGS = MappingProxyType({
    ReportVariant.ELECTION: ELECTION_LABELS,
    ReportVariant.SURVEY: SURVEY_LABELS,
})


def resolve(variant: ReportVariant, language: Language, key: str) -> str:
    """
    Look up the display string for a semantic key.

    Never raises: a key with no mapping for the language is returned verbatim.
    """
    labels = CATALOGS.get(variant, {}).get(language, {})
    return labels.get(key, key)


def survey_main_fields(language: Language) -> tuple[str, ...]:
    """Ordered main-data field keys for a survey report."""
    return SURVEY_MAIN_FIELDS.get(language, _SURVEY_FIELD_ORDER)


class LabelCatalog:
    """Resolver bound to one variant and language for the length of an export."""

    def __init__(self, variant: ReportVariant, language: Language):
        self.variant = variant
        self.language = language

    def __call__(self, key: str) -> str:
        return resolve(self.variant, self.language, key)

    def many(self, keys) -> list[str]:
        """Resolve several keys in order."""
        return [self(key) for key in keys]
