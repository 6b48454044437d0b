"""
Иерархия исключений анализа энергосистемы.

    GridError
      ├── DimensionError              - неверная топология или размерность вектора
      └── OperationPointError         - не найдена рабочая точка
            └── UnsupportedNodeTypeError - тип узла не поддерживается поиском
"""
from __future__ import annotations


class GridError(Exception):
    """Базовое исключение пакета"""


class DimensionError(GridError, ValueError):
    """Ветвь ссылается на несуществующий узел или длина вектора не совпадает"""


class OperationPointError(GridError):
    """Решатель не сошёлся к точке на многообразии ограничений"""


class UnsupportedNodeTypeError(OperationPointError):
    """Сеть содержит узел, для которого поиск рабочей точки не реализован"""
