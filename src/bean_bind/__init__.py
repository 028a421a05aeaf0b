"""bean_bind: synthesize contract-shaped beans and bind untyped values to typed setters."""

from .beans import (
    BeanFactory,
    SyntheticBean,
    contract_members,
    contract_of,
    create_synthetic_bean,
    is_synthetic_bean,
    properties_of,
)
from .binder import PropertyBinder, SetterDescriptor, discover_setters
from .converters import BUILTIN_CONVERTERS
from .core import NOT_CONVERTED, ConversionChain, ConversionNode, ConversionStrategy
from .errors import (
    BeanBindError,
    BindingError,
    ConversionError,
    InvalidArgumentError,
    InvalidContractError,
    SetterInvocationError,
    UnconvertibleValueError,
    UnknownPropertyError,
    UnsupportedMemberError,
)
from .factory import bind_properties, build_default_binder, build_default_chain, build_default_registry
from .registry import ConversionRegistry, ConverterKey
from .strategies import (
    ConstructorStrategy,
    FactoryMethodStrategy,
    ParseStrategy,
    RegistryStrategy,
    ValueOfStrategy,
)

__all__ = [
    # beans
    "BeanFactory",
    "SyntheticBean",
    "contract_members",
    "contract_of",
    "create_synthetic_bean",
    "is_synthetic_bean",
    "properties_of",
    # binder
    "PropertyBinder",
    "SetterDescriptor",
    "discover_setters",
    # conversion
    "BUILTIN_CONVERTERS",
    "NOT_CONVERTED",
    "ConversionChain",
    "ConversionNode",
    "ConversionStrategy",
    "ConversionRegistry",
    "ConverterKey",
    "RegistryStrategy",
    "FactoryMethodStrategy",
    "ValueOfStrategy",
    "ParseStrategy",
    "ConstructorStrategy",
    # factory
    "bind_properties",
    "build_default_binder",
    "build_default_chain",
    "build_default_registry",
    # errors
    "BeanBindError",
    "BindingError",
    "ConversionError",
    "InvalidArgumentError",
    "InvalidContractError",
    "SetterInvocationError",
    "UnconvertibleValueError",
    "UnknownPropertyError",
    "UnsupportedMemberError",
]
