"""
    Модуль plotting/standard_plots.py.
    Состав:
    Классы: нет.
    Функции: plot_operating_points, plot_trajectories.
"""
from __future__ import annotations

from typing import Mapping, Optional

import numpy as np
import matplotlib
import matplotlib.pyplot as plt

from core.results import SimulationResults
from core.state import State

matplotlib.rcParams['font.size'] = 9
matplotlib.rcParams['axes.grid'] = True
matplotlib.rcParams['figure.dpi'] = 150


def plot_operating_points(
    states: Mapping[str, State],
    title: str = "Рабочие точки",
    save_path: Optional[str] = None,
):
    """Модули напряжений узлов для нескольких рабочих точек."""

    fig, ax = plt.subplots(1, 1, figsize=(8, 5))
    fig.suptitle(title, fontsize=13, fontweight='bold')

    for label, state in states.items():
        v = state[:, "v"]
        ax.scatter(np.arange(len(v)), v, label=label, s=18)

    ax.set(xlabel='Узел', ylabel='|u|, о.е.')
    ax.legend(loc='upper left', fontsize=8)

    plt.tight_layout(rect=[0, 0, 1, 0.94])
    _save_and_close(fig, save_path)
    return fig


def plot_trajectories(res: SimulationResults, save_path: Optional[str] = None):
    """Модули напряжений и отклонения частоты по времени."""

    t = res.t
    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    fig.suptitle(f'Переходный процесс\n({res.scenario_name})',
                 fontsize=13, fontweight='bold')

    for n, node in enumerate(res.grid.nodes):
        axes[0].plot(t, res.series(n, "v"), lw=0.8, label=f'{n}: {node.type_tag}')
        if "ω" in node.symbols:
            axes[1].plot(t, res.series(n, "ω"), lw=0.8, label=f'{n}: {node.type_tag}')

    axes[0].set(ylabel='|u|, о.е.', title='Модули напряжений')
    axes[1].set(xlabel='Время, с', ylabel='ω, рад/с', title='Отклонение частоты')
    axes[0].legend(fontsize=8)
    if axes[1].get_legend_handles_labels()[0]:
        axes[1].legend(fontsize=8)

    plt.tight_layout(rect=[0, 0, 1, 0.95])
    _save_and_close(fig, save_path)
    return fig


def _save_and_close(fig, save_path: Optional[str]):
    """Сохраняет данные в файл."""

    if save_path:
        fig.savefig(save_path, dpi=200, bbox_inches='tight')
        print(f"  Сохранено: {save_path}")
    plt.close(fig)
