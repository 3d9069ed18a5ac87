from __future__ import annotations
from typing import Optional
import mediapipe as mp
import numpy as np
import cv2
from .contours import LandmarkFrame


class FaceLandmarks:
    """MediaPipe FaceMesh as a landmark source: BGR frame in, the closest face out."""
    def __init__(self, static_image_mode=False, max_num_faces=1, refine_landmarks=True,
                 min_detection_confidence=0.5, min_tracking_confidence=0.5):
        self.mesh = mp.solutions.face_mesh.FaceMesh(static_image_mode=static_image_mode,
                                                    refine_landmarks=refine_landmarks,
                                                    max_num_faces=max_num_faces,
                                                    min_detection_confidence=min_detection_confidence,
                                                    min_tracking_confidence=min_tracking_confidence)

    def __call__(self, frame_bgr) -> Optional[LandmarkFrame]:
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.mesh.process(rgb)
        if not res.multi_face_landmarks: return None
        h,w = frame_bgr.shape[:2]
        faces = [np.array([(lm.x, lm.y) for lm in f.landmark], dtype=np.float32) for f in res.multi_face_landmarks]
        # largest bbox area == closest face
        pts = max(faces, key=lambda p: float(np.ptp(p[:,0]) * np.ptp(p[:,1])))
        return LandmarkFrame(pts, w, h)

    def close(self):
        self.mesh.close()
