def mock_assessment_analysis(image_url: str, page_number: int, total_pages: int) -> dict:
    """Generate a deterministic assessment analysis for testing"""
    return {
        "documentContext": {
            "type": "assignment brief",
            "subject": "Unknown subject",
            "level": "undergraduate",
            "estimatedTime": "2 hours",
            "totalMarks": 100
        },
        "keyComponents": {
            "mainTopics": [f"Topic from page {page_number}"],
            "learningOutcomes": [],
            "requiredResources": []
        },
        "questions": [],
        "importantInstructions": [],
        "assessmentCriteria": [],
        "keyPages": [
            {
                "pageNumber": page_number,
                "content": f"Mock analysis of {image_url[:60]}",
                "relevance": f"Page {page_number} of {total_pages}"
            }
        ],
        "timeManagement": {"suggestedBreakdown": [], "priorityOrder": []},
        "summary": {
            "overview": f"Mock analysis for page {page_number} of {total_pages}.",
            "keyFocus": "Read the brief carefully",
            "commonPitfalls": []
        }
    }


def mock_page_analysis(page_number: int, total_pages: int) -> dict:
    """Per-page analysis shaped like the vision model's reply"""
    return {
        "documentContext": {
            "type": "Assignment",
            "subject": "Mock subject",
            "level": "Undergraduate",
            "wordCount": None,
            "keyTopics": ["Mock topic", f"Page {page_number} topic"]
        },
        "contentBreakdown": {
            "mainPoints": [f"Main point from page {page_number}"],
            "definitions": [],
            "examples": [],
            "references": []
        },
        "writingGuide": {
            "suggestedPoints": ["Structure the answer around the brief"],
            "relevantSources": [],
            "keyQuotes": [],
            "possibleArguments": []
        },
        "summary": {
            "overview": f"Mock overview of page {page_number} of {total_pages}.",
            "keyPoints": [f"Key point {page_number}"],
            "conclusionPoints": []
        },
        "pageAnalysis": {
            "pageNumber": page_number,
            "content": f"Mock content of page {page_number}.",
            "keyPoints": [f"Key point {page_number}"],
            "usefulContent": [],
            "topics": [f"Page {page_number} topic"],
            "arguments": [],
            "evidence": [],
            "connections": [],
            "importance": ""
        }
    }


def mock_document_analysis(total_pages: int) -> dict:
    return {
        "documentContext": {
            "type": "Assignment",
            "subject": "Mock subject",
            "level": "Undergraduate",
            "wordCount": None,
            "keyTopics": ["Mock topic"]
        },
        "contentBreakdown": {"mainPoints": ["Mock main point"], "definitions": [], "examples": [], "references": []},
        "writingGuide": {"suggestedPoints": [], "relevantSources": [], "keyQuotes": [], "possibleArguments": []},
        "summary": {
            "overview": f"Mock analysis of a {total_pages}-page document.",
            "keyPoints": [],
            "conclusionPoints": []
        }
    }
