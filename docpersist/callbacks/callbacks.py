from typing import Any, Callable, TypeVar

from .hook import Hook


F = TypeVar('F', bound=Callable[..., Any])

__hook__ = "__hook__"

def _register(hook: Hook) -> Callable[[F], F]:
	def decorator(func: F) -> F:
		# The metaclass picks up the marker when the class body is processed
		setattr(func, __hook__, hook)
		return func
	return decorator

def before_create(func: F) -> F:
	""" Register a method to run before a new document is written. """
	return _register(Hook.BEFORE_CREATE)(func)

def before_save(func: F) -> F:
	""" Register a method to run before a document is written, after the before_create callbacks. """
	return _register(Hook.BEFORE_SAVE)(func)

def after_create(func: F) -> F:
	""" Register a method to run once a new document has been written. """
	return _register(Hook.AFTER_CREATE)(func)

def after_save(func: F) -> F:
	""" Register a method to run once a document has been written, after the after_create callbacks. """
	return _register(Hook.AFTER_SAVE)(func)

def collect_callbacks(bases: tuple[type, ...], dct: dict[str, Any]) -> dict[Hook, list[Callable[..., Any]]]:
	""" Build the ordered callback lists for a class.
	Callbacks inherited from base classes run first, in base order, followed by the callbacks declared on the class itself in definition order.
	A method overridden in a subclass keeps its parent's position but runs the subclass implementation. """
	callbacks: dict[Hook, list[Callable[..., Any]]] = {hook: [] for hook in Hook}
	
	for base in bases:
		base_callbacks = getattr(base, "__callbacks__", None)
		if not base_callbacks:
			continue
		for hook, funcs in base_callbacks.items():
			for func in funcs:
				if func not in callbacks[hook]:
					callbacks[hook].append(func)

	for attr_name, attr_value in dct.items():
		hook = getattr(attr_value, __hook__, None)
		if hook is None:
			# A plain override of an inherited callback takes over its slot
			if callable(attr_value):
				for funcs in callbacks.values():
					_replace_by_name(funcs, attr_name, attr_value)
			continue
		if not _replace_by_name(callbacks[hook], attr_name, attr_value):
			callbacks[hook].append(attr_value)

	return callbacks

def _replace_by_name(funcs: list[Callable[..., Any]], name: str, replacement: Callable[..., Any]) -> bool:
	""" Swap the callback called `name` for `replacement`, keeping its position. Returns whether one was found. """
	for idx, func in enumerate(funcs):
		if getattr(func, "__name__", None) == name:
			funcs[idx] = replacement
			return True
	return False
