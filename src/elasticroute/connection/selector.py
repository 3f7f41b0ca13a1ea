"""节点选择器模块.

随机选择起始节点以便在多个客户端之间分摊负载，失败时按顺序轮换到下一个
节点，每次逻辑请求最多尝试所有节点各一次。
"""

import random


class NodeSelector:
    """集群节点选择器.

    Attributes:
        node_count: 节点数量
        current_index: 当前节点下标
        fail_count: 自上次重置以来连续失败的次数
    """

    def __init__(self, node_count: int, rng: random.Random | None = None) -> None:
        if node_count < 1:
            raise ValueError(f"node_count 必须 >= 1，当前值: {node_count}")
        self.node_count = node_count
        self._random = rng or random.Random()
        self.current_index = 0
        self.fail_count = 0
        self.reset()

    def pick_start(self, node_count: int) -> int:
        """返回 [0, node_count) 区间内均匀分布的随机下标."""
        return self._random.randrange(node_count)

    def reset(self) -> None:
        """重新随机选择起始节点并清零失败计数."""
        self.current_index = self.pick_start(self.node_count)
        self.fail_count = 0

    def advance(self) -> bool:
        """标记当前节点失败并切换到下一个节点.

        Returns:
            True 表示可以继续尝试下一个节点；
            False 表示所有节点均已失败（此时选择器已重置）
        """
        self.fail_count += 1
        if self.fail_count >= self.node_count:
            self.reset()
            return False
        self.current_index = (self.current_index + 1) % self.node_count
        return True

    def on_success(self) -> None:
        """请求成功后清零失败计数，当前节点不变."""
        self.fail_count = 0
