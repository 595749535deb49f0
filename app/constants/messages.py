# constants/messages.py

class MESSAGE:
    FORM_CREATED = "Form created successfully"
    FORMS_FOUND = "Forms retrieved successfully"
    FORM_FOUND = "Form retrieved successfully"
    FORM_DELETED = "Form deleted successfully"
    RESPONSE_SUBMITTED = "Form response submitted successfully"
    RESPONSES_FOUND = "Form responses retrieved successfully"
    FORM_GENERATED = "Form draft generated successfully"
    ORPHANS_FOUND = "Reconciliation report generated"
    ORPHAN_DROPPED = "Orphaned table dropped"
