from .stack import Stack
from .heap import Heap, DEFAULT_HEAP_CAPACITY
from .machine import Machine, STACK_EFFECTS
