class Display:
    """Всё, что движку нужно от отображения.

    Реализация (окно Qt, тестовый двойник) не хранит игрового состояния,
    а только показывает то, что ей передаёт TicTacToeLogic.
    """

    def render_board(self, board):
        """Создать сетку 3x3 из пустых клеток (один раз за сессию)"""
        raise NotImplementedError

    def mark_cell(self, row, col, player):
        """Поставить знак игрока в клетку. Движок не вызывает это для занятой клетки"""
        raise NotImplementedError

    def clear_board(self):
        """Очистить содержимое всех клеток, не трогая саму сетку"""
        raise NotImplementedError

    def render_score(self, score):
        """Создать табло счёта по игрокам (один раз за сессию)"""
        raise NotImplementedError

    def update_score(self, score, player):
        """Обновить только счёт указанного игрока"""
        raise NotImplementedError

    def show_message(self, winner):
        """Сообщение о конце раунда. winner=None - ничья"""
        raise NotImplementedError

    def clear_message(self):
        raise NotImplementedError

    def show_turn(self, player):
        raise NotImplementedError

    def highlight_line(self, cells):
        """Подсветить победную линию до следующего clear_board()"""
        raise NotImplementedError

    def on_cell_activated(self, callback):
        """Зарегистрировать единственный обработчик callback(row, col).

        Повторная регистрация заменяет предыдущий обработчик.
        """
        raise NotImplementedError
