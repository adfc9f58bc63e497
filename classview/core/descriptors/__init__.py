from .models import (
    ClassDescriptor,
    FieldDescriptor,
    LookupResult,
    MethodDescriptor,
    ParameterDescriptor,
)

__all__ = [
    "ClassDescriptor",
    "FieldDescriptor",
    "LookupResult",
    "MethodDescriptor",
    "ParameterDescriptor",
]
