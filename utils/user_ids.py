def normalize_user_id(user_id) -> str:
    """
    Clients send either the session form ("user_42") or the bare numeric
    form ("42"); both must resolve to the same rows.
    """
    user_id = str(user_id).strip()
    if user_id.isdigit():
        return f"user_{user_id}"
    return user_id
