class ROLES:
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"

    # Roles allowed to build forms and read their responses
    FORM_MANAGERS = (ADMIN, TEACHER)
