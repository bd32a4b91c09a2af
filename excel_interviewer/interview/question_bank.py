"""
Built-in question bank.

A small, fixed set of Excel interview question templates per difficulty.
Used directly by the question listing endpoint and as the fallback source
for the QuestionGenerator when the oracle is unavailable.
"""
from typing import Any, Dict, List, Optional

from .models import Difficulty, Question
from ..utils.config import MAX_DERIVED_KEYWORDS
from ..utils.text_utils import derive_keywords


QUESTION_TEMPLATES: Dict[Difficulty, List[Dict[str, Any]]] = {
    Difficulty.BEGINNER: [
        {
            "text": "What is the difference between a workbook and a worksheet in Excel?",
            "category": "Basics",
            "expected_answer": (
                "A workbook is the Excel file itself; it contains one or more worksheets. "
                "A worksheet is a single grid of cells, shown as a tab at the bottom of the window."
            ),
            "hints": ["Think about the file structure", "Consider what you see at the bottom of Excel"],
        },
        {
            "text": "What are absolute and relative cell references? When would you use each?",
            "category": "Formulas",
            "expected_answer": (
                "Relative references such as A1 shift when a formula is copied. Absolute references "
                "such as $A$1 use the dollar sign to stay fixed, for constants like a tax rate. "
                "Mixed references lock only the row or the column."
            ),
            "hints": ["Think about what happens when you copy formulas", "Remember the $ symbol"],
        },
        {
            "text": "Describe how to use conditional formatting to highlight data.",
            "category": "Formatting",
            "expected_answer": (
                "Select the range, open Home > Conditional Formatting and choose a rule such as "
                "greater than, duplicate values, color scales or a custom formula; set the highlight format."
            ),
            "hints": ["Look in the Home tab", "Think about setting conditions for formatting"],
        },
        {
            "text": "What are the different chart types available in Excel and when to use each?",
            "category": "Visualization",
            "expected_answer": (
                "Column and bar charts compare categories, line charts show trends over time, "
                "pie charts show parts of a whole, scatter charts show relationships between two numeric variables."
            ),
            "hints": ["Think about data types", "Consider what story you want to tell"],
        },
        {
            "text": "How do SUM, AVERAGE and COUNT functions differ?",
            "category": "Formulas",
            "expected_answer": (
                "SUM adds the numeric values in a range, AVERAGE returns their arithmetic mean, "
                "COUNT returns how many cells contain numbers; COUNTA counts non-empty cells."
            ),
            "hints": ["Think about what each returns for the range A1:A10"],
        },
        {
            "text": "How do you sort and filter a list of records?",
            "category": "Data Management",
            "expected_answer": (
                "Select the data and use Data > Sort to order by one or more columns; "
                "use Data > Filter to add dropdown filters to header cells and show matching rows only."
            ),
            "hints": ["Check the Data tab", "Think about header rows"],
        },
    ],
    Difficulty.INTERMEDIATE: [
        {
            "text": "Explain how to use VLOOKUP function with an example.",
            "category": "Functions",
            "expected_answer": (
                "VLOOKUP(lookup_value, table_array, col_index_num, range_lookup) searches the first column "
                "of the table and returns the value from the given column; use FALSE for an exact match."
            ),
            "hints": ["Remember the 4 parameters", "Think about exact vs approximate match"],
        },
        {
            "text": "How would you create a pivot table from raw data?",
            "category": "Data Analysis",
            "expected_answer": (
                "Select the data range, Insert > PivotTable, choose the destination, then drag fields "
                "into rows, columns, values and filters; change value summarization as needed."
            ),
            "hints": ["Start with selecting your data", "Use the Insert tab"],
        },
        {
            "text": "How do you create and use named ranges in Excel?",
            "category": "Formulas",
            "expected_answer": (
                "Select cells and type a name in the Name Box, or use Formulas > Define Name; "
                "refer to the name in formulas instead of cell addresses and manage them in Name Manager."
            ),
            "hints": ["Check the Name Box", "Look in the Formulas tab"],
        },
        {
            "text": "How would you remove duplicates from a dataset?",
            "category": "Data Cleaning",
            "expected_answer": (
                "Use Data > Remove Duplicates and choose the key columns, or use the UNIQUE function "
                "or an advanced filter with unique records only to keep the original data."
            ),
            "hints": ["Check the Data tab", "Think about built-in tools vs formulas"],
        },
        {
            "text": "How do you protect cells and worksheets in Excel?",
            "category": "Security",
            "expected_answer": (
                "Cells are locked by default; unlock editable cells via Format Cells > Protection, "
                "then Review > Protect Sheet with an optional password. Protect Workbook guards structure."
            ),
            "hints": ["Look in the Review tab", "Think about two-step process"],
        },
        {
            "text": "Explain how to use data validation in Excel.",
            "category": "Data Quality",
            "expected_answer": (
                "Data > Data Validation restricts input with criteria such as whole numbers, dates or a "
                "dropdown list; configure an input message and an error alert for invalid entries."
            ),
            "hints": ["Find it in the Data tab", "Think about controlling user input"],
        },
        {
            "text": "Explain how to create and use Excel tables.",
            "category": "Data Management",
            "expected_answer": (
                "Format as Table (Ctrl+T) converts a range into a table with headers, filters, banded rows "
                "and structured references that expand automatically as rows are added."
            ),
            "hints": ["Consider the benefits over regular ranges", "Think about dynamic ranges"],
        },
    ],
    Difficulty.ADVANCED: [
        {
            "text": "Explain the INDEX and MATCH functions and their advantages over VLOOKUP.",
            "category": "Functions",
            "expected_answer": (
                "MATCH returns the position of a value in a range and INDEX returns the value at a position; "
                "combined they allow left lookups, survive column insertions and are faster on large data."
            ),
            "hints": ["Think about lookup limitations", "Consider lookup direction flexibility"],
        },
        {
            "text": "What is the purpose of Excel macros and how do you create one?",
            "category": "Automation",
            "expected_answer": (
                "Macros automate repetitive tasks. Enable the Developer tab, record a macro or write VBA "
                "in the Visual Basic editor, and save the workbook as a macro-enabled xlsm file."
            ),
            "hints": ["Think about repetitive tasks", "Consider the Developer tab"],
        },
        {
            "text": "How do you use the Goal Seek feature?",
            "category": "Analysis",
            "expected_answer": (
                "Data > What-If Analysis > Goal Seek: set the formula cell, the target value and the "
                "variable input cell; Excel iterates the input until the formula reaches the target."
            ),
            "hints": ["Look in the Data tab", "Think about working backwards from a result"],
        },
        {
            "text": "How would you handle circular references in a model?",
            "category": "Troubleshooting",
            "expected_answer": (
                "Locate them with Formulas > Error Checking > Circular References and trace precedents; "
                "restructure the formulas, or enable iterative calculation with a maximum iteration count when intended."
            ),
            "hints": ["Think about formulas that reference themselves", "Consider calculation options"],
        },
        {
            "text": "How would you build a dynamic dashboard with slicers and pivot charts?",
            "category": "Visualization",
            "expected_answer": (
                "Base pivot tables on a structured table or data model, add pivot charts, insert slicers "
                "and timelines, and connect them to several pivot tables through Report Connections."
            ),
            "hints": ["Think about interactivity", "Consider Report Connections"],
        },
    ],
}


def get_templates(difficulty: Difficulty) -> List[Dict[str, Any]]:
    """Return the raw templates for a difficulty (copies)."""
    return [dict(t) for t in QUESTION_TEMPLATES.get(Difficulty(difficulty), [])]


def build_question(question_id: str, difficulty: Difficulty, template: Dict[str, Any]) -> Question:
    """Build a Question from a template, deriving keywords from its prompt."""
    return Question(
        id=question_id,
        text=template["text"],
        category=template.get("category") or "General",
        difficulty=Difficulty(difficulty),
        expected_answer=template.get("expected_answer", ""),
        keywords=derive_keywords(template["text"], limit=MAX_DERIVED_KEYWORDS),
        hints=list(template.get("hints", [])),
    )


def list_questions(
    difficulty: Optional[Difficulty] = None,
    category: Optional[str] = None
) -> List[Question]:
    """
    List the built-in bank, optionally filtered.

    Args:
        difficulty: Only return questions of this difficulty
        category: Only return questions in this category (case-insensitive)

    Returns:
        List of questions with stable ids ("bank-<difficulty>-<n>")
    """
    questions = []
    for level, templates in QUESTION_TEMPLATES.items():
        if difficulty is not None and level != Difficulty(difficulty):
            continue
        for i, template in enumerate(templates, start=1):
            if category and template["category"].lower() != category.lower():
                continue
            questions.append(build_question(f"bank-{level.value}-{i}", level, template))
    return questions


def list_categories() -> List[str]:
    return sorted({t["category"] for templates in QUESTION_TEMPLATES.values() for t in templates})
