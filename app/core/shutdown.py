from __future__ import annotations

import logging
import signal
import sys
import threading

logger = logging.getLogger(__name__)


def install_interrupt_handler(host: str, port: int) -> bool:
    """Captura SIGINT para o container Docker encerrar na hora.

    Não há drain: requisições em andamento podem ser interrompidas.
    Retorna False quando não está na thread principal (ex.: TestClient),
    onde o Python não permite registrar handlers de sinal.
    """
    if threading.current_thread() is not threading.main_thread():
        logger.debug("interrupt handler not installed outside main thread")
        return False

    def _exit_on_interrupt(signum, _frame) -> None:
        logger.info("Exiting from http://%s:%s", host, port)
        sys.exit(0)

    signal.signal(signal.SIGINT, _exit_on_interrupt)
    return True
