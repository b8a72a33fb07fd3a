import enum


class CaseInsensitiveEnum(str, enum.Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class SearchOperator(CaseInsensitiveEnum):
    WHERE = "where"
    HAVING = "having"


class SortDirection(CaseInsensitiveEnum):
    ASC = "asc"
    DESC = "desc"


class JoinType(CaseInsensitiveEnum):
    LEFT = "left"
    INNER = "inner"
