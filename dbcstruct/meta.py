import copy
import logging


class FieldDescriptor(object):
    """Wrapper around field access of a Layout related class.

    Accessed from the class it returns the Field itself, accessed from
    an instance it returns the decoded value."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        return instance.__dict__[self.field.name]

    def __set__(self, instance, value):
        raise AttributeError(f"field '{self.field.name}' of {instance.__class__.__name__} is read-only")


class FieldBase(object):

    def contribute_to_layout(self, cls, name, offset):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        # each class gets its own copy so that offsets of a parent are untouched
        field = copy.copy(self)
        field.offset = offset
        setattr(cls, name, FieldDescriptor(field, name))

        return field


class Meta(object):
    """Class containing metadata about the layout"""

    def __init__(self):
        self.fields = []
        self.size = 0


class MetaLayout(type):

    def __new__(cls, names, bases, attrs):
        '''Collect the fields in declaration order and compute the offset of each one,
        the fields of the parents come first.'''
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {
            '__module__': module,
        }
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super(MetaLayout, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()
        new_cls.logger = logging.getLogger(f"{module}.{names}")

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaLayout)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                new_cls.add_to_class(obj_name, getattr(parent, obj_name))

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if hasattr(value, 'contribute_to_layout'):
            cls.logger.debug('contribute_to_layout() found for field \'%s\' at offset %d' % (name, cls._meta.size))
            field = value.contribute_to_layout(cls, name, cls._meta.size)
            cls._meta.fields.append(name)
            cls._meta.size += field.size
        else:
            setattr(cls, name, value)
